"""Core simulation components."""

from .simulator import Simulator
from .event_queue import Event, EventType, EventQueue
from .snapshot import SnapshotRow
from .metrics_collector import MetricsCollector

__all__ = ["Simulator", "Event", "EventType", "EventQueue", "SnapshotRow", "MetricsCollector"]
