r"""Parameter validation utilities for retry tasks.

This module provides validation functions for the retry limits and the
tolerated exception types, so that invalid values are reported when a
task is configured rather than when its loop runs.
"""

from __future__ import annotations

__all__ = ["validate_exception_types", "validate_retry_params"]

import math


def validate_retry_params(
    max_try_count: int | None = None,
    max_try_time: float | None = None,
    try_interval: float | None = None,
) -> None:
    """Validate retry parameters.

    Parameters left to ``None`` are not checked.

    Args:
        max_try_count: Maximum number of attempts. Must be an int >= 1.
        max_try_time: Maximum total time budget in seconds. Must be > 0.
            ``math.inf`` means unbounded.
        try_interval: Wait between two attempts in seconds. Must be a
            finite value >= 0.

    Raises:
        TypeError: If max_try_count is not an int.
        ValueError: If a value is out of its allowed range.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_retry_params
        >>> validate_retry_params(max_try_count=3)
        >>> validate_retry_params(max_try_time=10.0, try_interval=0.1)
        >>> validate_retry_params(max_try_count=0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_try_count must be >= 1, got 0

        ```
    """
    if max_try_count is not None:
        if isinstance(max_try_count, bool) or not isinstance(max_try_count, int):
            msg = f"max_try_count must be an int, got {type(max_try_count).__name__}"
            raise TypeError(msg)
        if max_try_count < 1:
            msg = f"max_try_count must be >= 1, got {max_try_count}"
            raise ValueError(msg)
    if max_try_time is not None and (math.isnan(max_try_time) or max_try_time <= 0):
        msg = f"max_try_time must be > 0, got {max_try_time}"
        raise ValueError(msg)
    if try_interval is not None and not (0 <= try_interval < math.inf):
        msg = f"try_interval must be >= 0 and finite, got {try_interval}"
        raise ValueError(msg)


def validate_exception_types(exception_types: tuple[type, ...]) -> None:
    """Validate the exception types tolerated by a retry loop.

    Only ``Exception`` subclasses can be tolerated. ``BaseException``
    subclasses such as ``KeyboardInterrupt`` always propagate.

    Args:
        exception_types: The exception classes to tolerate.

    Raises:
        TypeError: If the tuple is empty or contains something that is
            not an ``Exception`` subclass.
    """
    if not exception_types:
        msg = "At least one exception type is required"
        raise TypeError(msg)
    for exc_type in exception_types:
        if not isinstance(exc_type, type) or not issubclass(exc_type, Exception):
            msg = f"Expected an Exception subclass, got {exc_type!r}"
            raise TypeError(msg)
