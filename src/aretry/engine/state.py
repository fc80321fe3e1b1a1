r"""Mutable state of a single retry loop invocation."""

from __future__ import annotations

__all__ = ["AttemptState"]

import time
from dataclasses import dataclass
from typing import Any


@dataclass
class AttemptState:
    """State of one retry loop, created fresh for every invocation.

    Attributes:
        start_time: ``time.perf_counter()`` value when the loop started.
        try_count: Number of attempts counted by the budget tracker.
            The attempt in progress is not included.
        last_result: Result of the most recent attempt, or None if it
            raised or no attempt completed yet.
        last_exception: The most recently tolerated exception, if any.
    """

    start_time: float
    try_count: int = 0
    last_result: Any = None
    last_exception: Exception | None = None

    @property
    def elapsed_time(self) -> float:
        """Seconds elapsed since the loop started."""
        return time.perf_counter() - self.start_time
