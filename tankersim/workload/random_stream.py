"""Circular, operator-supplied random draw sequences."""

from collections import deque
from enum import Enum
from typing import Dict, Iterable, List

from ..core.errors import ConfigurationError, ExhaustedStreamError


class StreamId(Enum):
    """Independent draw sequences consumed by the engine."""
    ARRIVAL = "arrival"
    LOAD = "load"


class RandomStreams:
    """Two finite draw sequences replayed indefinitely.

    ``next`` takes the head of a sequence and appends it to the tail, so a
    sequence of length k repeats with period k. Replay order is fixed by
    the supplied sequence; nothing is resampled.
    """

    def __init__(self, arrival_draws: Iterable[float] = (), load_draws: Iterable[float] = ()):
        """Initialize streams.

        Args:
            arrival_draws: Draws in [0, 1) for inter-arrival times
            load_draws: Draws in [0, 1) for ship load selection
        """
        self._supplied: Dict[StreamId, List[float]] = {
            StreamId.ARRIVAL: self._validate(StreamId.ARRIVAL, arrival_draws),
            StreamId.LOAD: self._validate(StreamId.LOAD, load_draws),
        }
        self._streams: Dict[StreamId, deque] = {}
        self.reset()

    @staticmethod
    def _validate(stream_id: StreamId, draws: Iterable[float]) -> List[float]:
        values = [float(d) for d in draws]
        for value in values:
            if not 0.0 <= value < 1.0:
                raise ConfigurationError(
                    f"{stream_id.value} draw {value} is outside [0, 1)"
                )
        return values

    def next(self, stream_id: StreamId) -> float:
        """Consume the head draw of a stream and requeue it at the tail.

        Raises:
            ExhaustedStreamError: If the stream holds no draws
        """
        stream = self._streams[stream_id]
        if not stream:
            raise ExhaustedStreamError(f"No draws available in the {stream_id.value} stream")
        value = stream.popleft()
        stream.append(value)
        return value

    def has_draws(self, stream_id: StreamId) -> bool:
        return bool(self._streams[stream_id])

    def reset(self) -> None:
        """Rewind both streams to the order originally supplied."""
        self._streams = {
            stream_id: deque(values) for stream_id, values in self._supplied.items()
        }

    def snapshot(self, stream_id: StreamId) -> List[float]:
        """Current order of a stream, head first."""
        return list(self._streams[stream_id])

    def __len__(self) -> int:
        return sum(len(stream) for stream in self._streams.values())

    def __repr__(self) -> str:
        return (
            f"RandomStreams(arrival={len(self._streams[StreamId.ARRIVAL])}, "
            f"load={len(self._streams[StreamId.LOAD])})"
        )


def draws_from_digits(digits: Iterable[int]) -> List[float]:
    """Convert operator-entered integers 0..99 to draws in [0, 1).

    Raises:
        ConfigurationError: If a value is not an integer in 0..99
    """
    draws = []
    for digit in digits:
        if isinstance(digit, bool) or int(digit) != digit or not 0 <= digit <= 99:
            raise ConfigurationError(f"Random number {digit!r} must be an integer in 0..99")
        draws.append(int(digit) / 100)
    return draws
