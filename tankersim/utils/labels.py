"""Translation between engine states and display vocabulary."""

from typing import Optional, Union

from ..core.errors import ConfigurationError
from ..core.event_queue import EventType
from ..terminal.entities import ShipState, TankState

TANK_STATE_LABELS = {
    TankState.FREE: "Free",
    TankState.LOADING: "Loading",
    TankState.DISCHARGING: "Discharging",
}

SHIP_STATE_LABELS = {
    ShipState.LOADING: "Loading",
    ShipState.QUEUED: "Queued",
    ShipState.DISCHARGED: "Discharged",
}

# Accepted spellings when reading tank status from configuration
_TANK_STATE_ALIASES = {
    "free": TankState.FREE,
    "loading": TankState.LOADING,
    "discharging": TankState.DISCHARGING,
    "unloading": TankState.DISCHARGING,
}


def tank_state_label(state: TankState) -> str:
    return TANK_STATE_LABELS[state]


def ship_state_label(state: ShipState) -> str:
    return SHIP_STATE_LABELS[state]


def event_label(event_type: EventType) -> str:
    return event_type.label


def ship_reference(ship_id: Optional[int]) -> str:
    """Display reference for a ship, e.g. ``B3``; empty when there is none."""
    return f"B{ship_id}" if ship_id is not None else ""


def parse_tank_state(value: Union[str, TankState]) -> TankState:
    """Parse a configured tank status.

    Raises:
        ConfigurationError: If the status is not recognized
    """
    if isinstance(value, TankState):
        return value
    try:
        return _TANK_STATE_ALIASES[str(value).strip().lower()]
    except KeyError:
        raise ConfigurationError(f"Unknown tank status: {value!r}") from None
