"""Event queue implementation for discrete event simulation."""

import heapq
import itertools
from enum import Enum
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .errors import EmptyQueueError


class EventType(Enum):
    """Types of events in the simulation."""
    SHIP_ARRIVAL = "ship_arrival"
    PUMPING_COMPLETE = "pumping_complete"
    DISCHARGE_COMPLETE = "discharge_complete"

    @property
    def label(self) -> str:
        """Human-readable name used in snapshot rows."""
        return self.value.replace("_", " ").capitalize()

    @property
    def targets_tank(self) -> bool:
        return self is not EventType.SHIP_ARRIVAL


@dataclass(frozen=True)
class Event:
    """Event in the discrete event simulation.

    Attributes:
        time: Event timestamp (simulated hours)
        event_type: Type of event
        tank_id: Tank the event completes on; None for ship arrivals
    """
    time: float
    event_type: EventType
    tank_id: Optional[int] = field(default=None)

    def __post_init__(self):
        """Validate event after initialization."""
        if self.time < 0:
            raise ValueError("Event time cannot be negative")
        if self.event_type.targets_tank and self.tank_id is None:
            raise ValueError(f"{self.event_type.value} event requires a tank_id")
        if not self.event_type.targets_tank and self.tank_id is not None:
            raise ValueError("Ship arrival events do not reference a tank")


class EventQueue:
    """Priority queue for managing simulation events.

    Events are ordered by time, with earlier events processed first.
    Events at the same time are returned in the order they were pushed.
    """

    def __init__(self):
        """Initialize empty event queue."""
        self._queue: List[Tuple[float, int, Event]] = []
        self._sequence = itertools.count()

    def push(self, event: Event) -> None:
        """Add event to the queue.

        Args:
            event: Event to add
        """
        heapq.heappush(self._queue, (event.time, next(self._sequence), event))

    def pop(self) -> Event:
        """Remove and return the next event.

        Returns:
            Next event to process

        Raises:
            EmptyQueueError: If queue is empty
        """
        if self.is_empty():
            raise EmptyQueueError("Cannot pop from empty event queue")
        return heapq.heappop(self._queue)[2]

    def peek(self) -> Optional[Event]:
        """Return the next event without removing it.

        Returns:
            Next event, or None if queue is empty
        """
        return self._queue[0][2] if self._queue else None

    def next_for_tank(self, tank_id: int) -> Optional[Event]:
        """First pending event, in pop order, that references a tank."""
        for event in self:
            if event.tank_id == tank_id:
                return event
        return None

    def is_empty(self) -> bool:
        """Check if queue is empty.

        Returns:
            True if queue is empty
        """
        return len(self._queue) == 0

    def size(self) -> int:
        """Get number of events in queue.

        Returns:
            Number of events
        """
        return len(self._queue)

    def clear(self) -> None:
        """Remove all events from queue."""
        self._queue.clear()

    def __iter__(self) -> Iterator[Event]:
        """Iterate pending events in the order they would be popped."""
        return (entry[2] for entry in sorted(self._queue))

    def __len__(self) -> int:
        """Get number of events in queue."""
        return len(self._queue)

    def __repr__(self) -> str:
        """String representation of event queue."""
        return f"EventQueue(size={len(self._queue)}, next={self.peek()})"
