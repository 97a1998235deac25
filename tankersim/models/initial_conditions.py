"""Initial tank conditions for a run."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.errors import ConfigurationError
from ..terminal.entities import TankState
from ..utils.labels import parse_tank_state


@dataclass
class TankCondition:
    """Starting condition of one tank.

    Attributes:
        state: Starting state
        current_load: Tonnes in the tank
        completion_time: Absolute time the current pumping or discharge ends
    """
    state: TankState = TankState.FREE
    current_load: float = 0.0
    completion_time: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "TankCondition":
        completion_time = data.get('completion_time')
        return cls(
            state=parse_tank_state(data.get('status', data.get('state', 'free'))),
            current_load=float(data.get('current_load', 0.0) or 0.0),
            completion_time=None if completion_time is None else float(completion_time),
        )


@dataclass
class InitialConditions:
    """Tank conditions and first arrival time.

    An empty ``tanks`` list means every tank starts free and empty.
    """
    tanks: List[TankCondition] = field(default_factory=list)
    first_arrival: float = 0.0

    def __post_init__(self):
        if self.first_arrival < 0:
            raise ConfigurationError("first_arrival cannot be negative")

    @classmethod
    def from_config(cls, config: Dict) -> "InitialConditions":
        """Build from the ``initial_conditions`` section of a config."""
        section = config.get('initial_conditions') or {}
        return cls(
            tanks=[TankCondition.from_dict(t) for t in section.get('tanks') or []],
            first_arrival=float(section.get('first_arrival', 0.0) or 0.0),
        )
