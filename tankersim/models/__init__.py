"""Parameter and initial-condition models."""

from .parameters import SimulationParameters
from .initial_conditions import InitialConditions, TankCondition

__all__ = ["SimulationParameters", "InitialConditions", "TankCondition"]
