"""Transforms from a canonical draw in [0, 1) to domain quantities."""

import numpy as np

from ..core.errors import DomainError


def uniform(r: float, lo: float, hi: float) -> float:
    """Map a draw onto the interval [lo, hi)."""
    return lo + r * (hi - lo)


def exponential(r: float, mean: float) -> float:
    """Inverse-transform sample of an exponential distribution.

    Args:
        r: Draw in [0, 1)
        mean: Distribution mean, must be positive

    Returns:
        ``-mean * ln(1 - r)``

    Raises:
        DomainError: If ``r`` is outside [0, 1) or ``mean`` is not positive
    """
    if mean <= 0:
        raise DomainError(f"Exponential mean must be positive, got {mean}")
    if not 0.0 <= r < 1.0:
        raise DomainError(f"Draw must be in [0, 1), got {r}")
    return float(-mean * np.log(1.0 - r))


def clamp(x: float, lo: float, hi: float) -> float:
    """Limit ``x`` to the closed interval [lo, hi]."""
    return min(max(x, lo), hi)
