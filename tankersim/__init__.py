"""TankerSim: Tanker Fuel Terminal Simulator."""

from .core.simulator import Simulator
from .core.event_queue import Event, EventType, EventQueue
from .core.metrics_collector import MetricsCollector
from .core.runner import SimulationRunner
from .core.snapshot import SnapshotRow
from .models.parameters import SimulationParameters
from .models.initial_conditions import InitialConditions, TankCondition
from .utils.logger import setup_logger

__version__ = "0.1.0"
__all__ = [
    "Simulator",
    "Event",
    "EventType",
    "EventQueue",
    "MetricsCollector",
    "SimulationRunner",
    "SnapshotRow",
    "SimulationParameters",
    "InitialConditions",
    "TankCondition",
    "setup_logger",
]
