r"""Blocking retry task.

This module provides the RetryTask class, the fluent builder that runs
its retry loop on the calling thread.
"""

from __future__ import annotations

__all__ = ["RetryTask"]

from typing import TYPE_CHECKING, Any, TypeVar

from aretry.core.task_logic import BaseRetryTask
from aretry.engine.decider import RetryDecider
from aretry.engine.executor import RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


class RetryTask(BaseRetryTask[T]):
    r"""Fluent builder for a retry loop that blocks the calling thread.

    Tasks are usually obtained from ``RetryHelper.retry`` or
    ``aretry.retry``. Configuration methods return new tasks, and a
    task can be run any number of times; each run starts from zero
    attempts with its own clock.

    Example:
        ```pycon
        >>> from aretry import retry
        >>> values = iter([0.5, 0.3, 0.05])
        >>> task = retry(lambda: next(values)).with_try_interval(0.01).with_max_try_count(5)
        >>> task.until(lambda value: value < 0.1)
        0.05

        ```
    """

    def until(self, predicate: Callable[..., Any]) -> T:
        """Retry until the predicate holds for an attempt's result.

        Any exception raised by the operation is fatal and propagates
        unmodified.

        Args:
            predicate: A callable taking the attempt's result, or taking
                no argument for an external condition.

        Returns:
            The result of the first attempt satisfying the predicate.

        Raises:
            RetryTimeoutError: If the time or count budget is exceeded.
        """
        decider = RetryDecider.until(predicate, trace_logger=self.trace_logger)
        return RetryExecutor(self.config, self.trace_logger).execute(decider)

    def until_no_exception(self, *exception_types: type[Exception]) -> T:
        """Retry until an attempt returns without raising.

        Args:
            *exception_types: The exception classes to tolerate,
                subclasses included. Defaults to any ``Exception``.
                Other exceptions propagate unmodified.

        Returns:
            The result of the first attempt that did not raise.

        Raises:
            RetryTimeoutError: If the time or count budget is exceeded.
                The last tolerated exception is chained as its cause.
            TypeError: If an exception type is not an Exception subclass.
        """
        decider = RetryDecider.until_no_exception(
            *exception_types, trace_logger=self.trace_logger
        )
        return RetryExecutor(self.config, self.trace_logger).execute(decider)
