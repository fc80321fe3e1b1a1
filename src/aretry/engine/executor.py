r"""Synchronous retry executor.

This module provides the RetryExecutor class that drives the shared
retry state machine on the calling thread, blocking with
``time.sleep`` between attempts.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from typing import TYPE_CHECKING, Any

from aretry.callbacks import ensure_not_awaitable
from aretry.core.config import DEFAULT_LOGGER_NAME
from aretry.engine.executor_core import Attempt, Evaluate, Notify, Wait, retry_loop
from aretry.engine.manager import CallbackManager

if TYPE_CHECKING:
    from aretry.engine.config import RetryConfig
    from aretry.engine.decider import RetryDecider
    from aretry.engine.executor_core import Step


class RetryExecutor:
    """Executes an operation with retry logic on the calling thread.

    The executor only performs the steps requested by the shared state
    machine: it calls the operation, evaluates the predicate, fires the
    callbacks and sleeps. Each call to :meth:`execute` is an independent
    loop with its own state, so one executor can be shared between
    threads.

    Attributes:
        config: The retry configuration.
        callbacks: Manager for invoking the lifecycle callbacks.
        trace_logger: Logger receiving the diagnostic trace.

    Example:
        ```pycon
        >>> from aretry.engine import RetryConfig, RetryDecider, RetryExecutor
        >>> values = iter([1, 2, 3])
        >>> config = RetryConfig(operation=lambda: next(values), try_interval=0.0)
        >>> RetryExecutor(config).execute(RetryDecider.until(lambda result: result >= 2))
        2

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

    def execute(self, decider: RetryDecider) -> Any:
        """Run the retry loop until completion.

        Args:
            decider: The completion and exception policy of this loop.

        Returns:
            The result of the successful attempt.

        Raises:
            RetryTimeoutError: If the time or count budget is exceeded.
            TypeError: If the operation, predicate or a callback returns
                an awaitable.
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
                        result = self.config.operation()
                    except Exception as exc:
                        if decider.should_raise(exc):
                            raise
                        error = exc
                    else:
                        value = ensure_not_awaitable(result, "operation")
                else:
                    value = self._run_step(step, decider)
        finally:
            loop.close()

    def _run_step(self, step: Step, decider: RetryDecider) -> Any:
        if isinstance(step, Evaluate):
            return ensure_not_awaitable(decider.predicate(step.result), "predicate")
        if isinstance(step, Notify):
            self.callbacks.fire(step.event, step.result, step.try_count)
            return None
        if isinstance(step, Wait):
            time.sleep(step.seconds)
            return None
        msg = f"Unexpected retry step: {step!r}"
        raise TypeError(msg)
