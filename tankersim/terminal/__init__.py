"""Terminal entities and simulation state."""

from .entities import Ship, ShipState, Tank, TankState
from .state import SimulationState, SimulationStatistics

__all__ = ["Ship", "ShipState", "Tank", "TankState", "SimulationState", "SimulationStatistics"]
