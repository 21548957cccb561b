"""Input range checks shared by the statistics functions."""

import math

from src.stats_engine.errors import OutOfRangeInput


def require_finite(name: str, value: float) -> float:
    """Reject NaN and infinite values."""
    if not math.isfinite(value):
        raise OutOfRangeInput(f"{name} must be finite, got {value}")
    return value


def require_unit_interval(name: str, value: float) -> float:
    """Reject values outside [0, 1]. NaN is rejected as well."""
    require_finite(name, value)
    if not 0.0 <= value <= 1.0:
        raise OutOfRangeInput(f"{name} must be in [0, 1], got {value}")
    return value
