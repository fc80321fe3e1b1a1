r"""Default configuration values for retry tasks.

This module provides the process-wide default limits used when a task
is created without explicit settings, and a helper to normalise the
duration values accepted by the builder API.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_LOGGER_NAME",
    "DEFAULT_MAX_TRY_COUNT",
    "DEFAULT_MAX_TRY_TIME",
    "DEFAULT_TRY_INTERVAL",
    "to_seconds",
]

import math
import sys
from datetime import timedelta

# Default wait between two attempts, in seconds
DEFAULT_TRY_INTERVAL = 0.5

# Default maximum number of attempts (practically unbounded)
DEFAULT_MAX_TRY_COUNT = sys.maxsize

# Default maximum total time in seconds (unbounded)
DEFAULT_MAX_TRY_TIME = math.inf

# Name of the logger receiving the diagnostic trace of retry loops
DEFAULT_LOGGER_NAME = "aretry.trace"


def to_seconds(value: float | timedelta) -> float:
    """Convert a duration to a number of seconds.

    Args:
        value: The duration, either as a number of seconds or as a
            ``datetime.timedelta``.

    Returns:
        The duration in seconds.

    Raises:
        TypeError: If the value is neither a number nor a timedelta.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry.core.config import to_seconds
        >>> to_seconds(1.5)
        1.5
        >>> to_seconds(timedelta(milliseconds=250))
        0.25

        ```
    """
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"Expected a number of seconds or a timedelta, got {type(value).__name__}"
        raise TypeError(msg)
    return float(value)
