"""Utility functions and helpers."""

from .logger import setup_logger
from .labels import event_label, ship_reference, tank_state_label

__all__ = ["setup_logger", "event_label", "ship_reference", "tank_state_label"]
