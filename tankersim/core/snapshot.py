"""State-vector rows reported after each processed event."""

from dataclasses import dataclass, field
from typing import List, Optional

from dataclasses_json import dataclass_json

from .event_queue import EventType
from ..terminal.entities import TankState


@dataclass_json
@dataclass
class TankCompletionInfo:
    """Remaining load and next completion time of one tank."""
    tank_id: int
    remaining_load: float
    next_completion_time: float


@dataclass_json
@dataclass
class TankStatusInfo:
    """Status of one tank and the ship it is pumping, if any."""
    tank_id: int
    status: TankState
    remaining_load: float
    loading_ship_id: Optional[int] = None


@dataclass_json
@dataclass
class SnapshotRow:
    """One row of the state vector.

    Transient fields carry the value last computed by the event kind that
    produces them, not zeros, when the current event did not touch them.
    """
    event_number: int
    clock_time: float
    event_type: EventType
    event_label: str

    # Ship arrival
    arrival_draw: float = 0.0
    inter_arrival_time: float = 0.0
    next_arrival_time: float = 0.0

    # Ship load and pumping
    load_draw: float = 0.0
    load_tonnage: float = 0.0
    pump_duration: float = 0.0
    pump_duration_with_startup: float = 0.0
    pump_completion_time: float = 0.0
    tank_load_at_pump_start: float = 0.0
    pump_start_completion_time: float = 0.0

    # Tank discharge to refinery
    discharge_load_at_start: float = 0.0
    discharge_completion_time: float = 0.0

    per_tank_completion_info: List[TankCompletionInfo] = field(default_factory=list)

    # Statistics
    total_discharged_tonnage: float = 0.0
    max_queue_length: int = 0

    per_tank_status: List[TankStatusInfo] = field(default_factory=list)

    def tank_status(self, tank_id: int) -> TankStatusInfo:
        """Status entry for a tank id."""
        for info in self.per_tank_status:
            if info.tank_id == tank_id:
                return info
        raise KeyError(tank_id)
