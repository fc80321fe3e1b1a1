r"""Exceptions raised by retry loops."""

from __future__ import annotations

__all__ = ["RetryTimeoutError"]

from typing import Any


class RetryTimeoutError(TimeoutError):
    """Exception raised when a retry loop exhausts its budget.

    The loop stops either because the maximum try time has elapsed or
    because the maximum number of attempts has been made without the
    completion condition being met. When the loop tolerated exceptions,
    the last one is chained as ``__cause__``.

    Args:
        message: Human-readable description of the exceeded limit.
        limit: Which limit was exceeded, ``"time"`` or ``"count"``.
        try_count: Number of attempts counted when the loop stopped.
        elapsed_time: Seconds elapsed since the loop started.
        last_result: Result of the last attempt, or None if the last
            attempt raised.

    Example:
        ```pycon
        >>> from aretry.exceptions import RetryTimeoutError
        >>> error = RetryTimeoutError(
        ...     "The maximum try count 3 for the operation has been exceeded.",
        ...     limit="count",
        ...     try_count=3,
        ...     elapsed_time=1.0,
        ... )
        >>> error.limit
        'count'
        >>> isinstance(error, TimeoutError)
        True

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        limit: str,
        try_count: int,
        elapsed_time: float,
        last_result: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.limit = limit
        self.try_count = try_count
        self.elapsed_time = elapsed_time
        self.last_result = last_result

    def __str__(self) -> str:
        return self.message
