r"""Budget tracking for retry loops.

This module provides the BudgetTracker class that decides, after each
unsuccessful attempt, whether the time and attempt limits allow another
one.
"""

from __future__ import annotations

__all__ = ["BudgetExceeded", "BudgetTracker"]

import time
from typing import NamedTuple

from aretry.engine.state import AttemptState


class BudgetExceeded(NamedTuple):
    """Description of an exceeded limit.

    Attributes:
        limit: ``"time"`` or ``"count"``.
        message: Human-readable message naming the configured value.
    """

    limit: str
    message: str


class BudgetTracker:
    """Tracks elapsed time and attempt count against configured limits.

    The elapsed time is checked before the attempt count on every cycle,
    and the count is only incremented when the time budget still allows
    another attempt.

    Args:
        max_try_count: Maximum number of attempts.
        max_try_time: Maximum total time in seconds.

    Example:
        ```pycon
        >>> from aretry.engine.budget import BudgetTracker
        >>> tracker = BudgetTracker(max_try_count=2, max_try_time=60.0)
        >>> state = tracker.start()
        >>> tracker.check(state) is None
        True
        >>> tracker.check(state).limit
        'count'
        >>> state.try_count
        2

        ```
    """

    def __init__(self, max_try_count: int, max_try_time: float) -> None:
        self.max_try_count = max_try_count
        self.max_try_time = max_try_time

    def start(self) -> AttemptState:
        """Start the clock of a new loop invocation.

        Returns:
            A fresh attempt state.
        """
        return AttemptState(start_time=time.perf_counter())

    def check(self, state: AttemptState) -> BudgetExceeded | None:
        """Decide whether another attempt is permitted.

        Increments ``state.try_count`` unless the time budget is already
        exhausted.

        Args:
            state: The state of the running loop.

        Returns:
            None if another attempt is permitted, otherwise a description
            of the exceeded limit.
        """
        if state.elapsed_time >= self.max_try_time:
            return BudgetExceeded(
                limit="time",
                message=(
                    f"The maximum try time {self.max_try_time}s for the operation "
                    "has been exceeded."
                ),
            )
        state.try_count += 1
        if state.try_count >= self.max_try_count:
            return BudgetExceeded(
                limit="count",
                message=(
                    f"The maximum try count {self.max_try_count} for the operation "
                    "has been exceeded."
                ),
            )
        return None
