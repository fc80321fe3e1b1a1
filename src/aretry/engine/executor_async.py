r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that drives the shared
retry state machine inside a coroutine, suspending with
``asyncio.sleep`` between attempts.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

from aretry.core.config import DEFAULT_LOGGER_NAME
from aretry.engine.executor_core import Attempt, Evaluate, Notify, Wait, retry_loop
from aretry.engine.manager import CallbackManager

if TYPE_CHECKING:
    from aretry.engine.config import RetryConfig
    from aretry.engine.decider import RetryDecider
    from aretry.engine.executor_core import Step


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class AsyncRetryExecutor:
    """Executes an operation with retry logic inside a coroutine.

    The operation, the predicate and the callbacks may be plain callables
    or coroutine functions; awaitable outcomes are awaited one at a time,
    so the steps of a loop never overlap. Waiting between attempts does
    not block the event loop, and independent loops can run concurrently
    on the same executor.

    Attributes:
        config: The retry configuration.
        callbacks: Manager for invoking the lifecycle callbacks.
        trace_logger: Logger receiving the diagnostic trace.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.engine import AsyncRetryExecutor, RetryConfig, RetryDecider
        >>> async def fetch():
        ...     return "ready"
        ...
        >>> config = RetryConfig(operation=fetch, try_interval=0.0)
        >>> executor = AsyncRetryExecutor(config)
        >>> asyncio.run(executor.execute(RetryDecider.until(lambda status: status == "ready")))
        'ready'

        ```
    """

    def __init__(
        self,
        retry_config: RetryConfig,
        trace_logger: logging.Logger | None = None,
    ) -> None:
        self.config = retry_config
        self.callbacks: CallbackManager = CallbackManager(retry_config.callbacks)
        self.trace_logger = trace_logger or logging.getLogger(DEFAULT_LOGGER_NAME)

    async def execute(self, decider: RetryDecider) -> Any:
        """Run the retry loop until completion.

        Note:
            Task cancellation (``asyncio.CancelledError``) is never
            tolerated and stops the loop immediately. A fatal
            ``StopIteration`` leaves the coroutine as the
            ``RuntimeError`` the interpreter raises for it, with the
            original exception as ``__cause__``.

        Args:
            decider: The completion and exception policy of this loop.

        Returns:
            The result of the successful attempt.

        Raises:
            RetryTimeoutError: If the time or count budget is exceeded.
            Exception: Any fatal exception raised by the operation, the
                predicate or a callback, unmodified.
        """
        loop = retry_loop(self.config, decider, self.trace_logger)
        value: Any = None
        error: Exception | None = None
        try:
            while True:
                try:
                    step = loop.send(value) if error is None else loop.throw(error)
                except StopIteration as stop:
                    return stop.value
                value, error = None, None
                if isinstance(step, Attempt):
                    try:
                        value = await _resolve(self.config.operation())
                    except Exception as exc:
                        if decider.should_raise(exc):
                            raise
                        error = exc
                else:
                    value = await self._run_step(step, decider)
        finally:
            loop.close()

    async def _run_step(self, step: Step, decider: RetryDecider) -> Any:
        if isinstance(step, Evaluate):
            return await _resolve(decider.predicate(step.result))
        if isinstance(step, Notify):
            await self.callbacks.fire_async(step.event, step.result, step.try_count)
            return None
        if isinstance(step, Wait):
            await asyncio.sleep(step.seconds)
            return None
        msg = f"Unexpected retry step: {step!r}"
        raise TypeError(msg)
