"""Random draws and distributions driving arrivals and loads."""

from .distributions import clamp, exponential, uniform
from .random_stream import RandomStreams, StreamId, draws_from_digits

__all__ = ["clamp", "exponential", "uniform", "RandomStreams", "StreamId", "draws_from_digits"]
