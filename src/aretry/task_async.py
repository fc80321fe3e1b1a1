r"""Suspending retry task.

This module provides the AsyncRetryTask class, the fluent builder that
runs its retry loop inside a coroutine.
"""

from __future__ import annotations

__all__ = ["AsyncRetryTask"]

from typing import TYPE_CHECKING, Any, TypeVar

from aretry.core.task_logic import BaseRetryTask
from aretry.engine.decider import RetryDecider
from aretry.engine.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


class AsyncRetryTask(BaseRetryTask[T]):
    r"""Fluent builder for a retry loop running in a coroutine.

    The operation, the predicate and the callbacks may be plain
    callables or coroutine functions. Waiting between attempts uses
    ``asyncio.sleep`` and does not block the event loop.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import retry_async
        >>> async def poll():
        ...     return "done"
        ...
        >>> task = retry_async(poll).with_try_interval(0.01)
        >>> asyncio.run(task.until(lambda status: status == "done"))
        'done'

        ```
    """

    async def until(self, predicate: Callable[..., Any]) -> T:
        """Retry until the predicate holds for an attempt's result.

        Any exception raised by the operation is fatal and propagates
        unmodified.

        Args:
            predicate: A callable or coroutine function taking the
                attempt's result, or taking no argument for an external
                condition.

        Returns:
            The result of the first attempt satisfying the predicate.

        Raises:
            RetryTimeoutError: If the time or count budget is exceeded.
        """
        decider = RetryDecider.until(predicate, trace_logger=self.trace_logger)
        return await AsyncRetryExecutor(self.config, self.trace_logger).execute(decider)

    async def until_no_exception(self, *exception_types: type[Exception]) -> T:
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
        return await AsyncRetryExecutor(self.config, self.trace_logger).execute(decider)
