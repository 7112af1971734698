"""Human-readable duration formatting."""

from datetime import timedelta
from typing import Tuple, Union

# Ordered from finest to coarsest: (suffix, seconds per unit)
UNITS = [
    ("s", 1),
    ("m", 60),
    ("h", 60 * 60),
    ("d", 24 * 60 * 60),
]


def _to_seconds(duration: Union[timedelta, int, float]) -> float:
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    else:
        seconds = float(duration)
    return max(0.0, seconds)


def select_unit(seconds: float) -> Tuple[str, int]:
    """Pick the coarsest unit in which the duration is still at least one.

    Args:
        seconds: Duration in seconds

    Returns:
        Tuple of unit suffix and the number of seconds in that unit
    """
    unit_index = 0

    while unit_index < len(UNITS) - 1 and seconds >= UNITS[unit_index + 1][1]:
        unit_index += 1

    return UNITS[unit_index]


def format_duration(duration: Union[timedelta, int, float]) -> str:
    """Format a duration as a whole number of its coarsest unit.

    Args:
        duration: A timedelta or a number of seconds

    Returns:
        Formatted duration such as "98s", "3m" or "2h"
    """
    seconds = _to_seconds(duration)
    suffix, unit_seconds = select_unit(seconds)
    return f"{int(seconds // unit_seconds)}{suffix}"
