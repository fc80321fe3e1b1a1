r"""Entry point creating retry tasks from process-wide defaults.

This module provides the RetryHelper class, which holds the default
limits and the trace logger applied to every task it creates, and the
module-level ``retry`` and ``retry_async`` shortcuts bound to the shared
default helper.
"""

from __future__ import annotations

__all__ = ["RetryHelper", "retry", "retry_async"]

import inspect
import logging
import threading
from typing import TYPE_CHECKING, Any, ClassVar

from aretry.core.config import (
    DEFAULT_LOGGER_NAME,
    DEFAULT_MAX_TRY_COUNT,
    DEFAULT_MAX_TRY_TIME,
    DEFAULT_TRY_INTERVAL,
    to_seconds,
)
from aretry.core.validation import validate_retry_params
from aretry.engine.config import RetryConfig
from aretry.task import RetryTask
from aretry.task_async import AsyncRetryTask

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from datetime import timedelta


class RetryHelper:
    r"""Create retry tasks initialised with configurable defaults.

    Changing a default only affects the tasks created afterwards; tasks
    already built keep their own immutable configuration.

    Args:
        logger: Logger receiving the diagnostic trace of the loops.
            Defaults to the ``aretry.trace`` logger.
        default_max_try_count: The default maximum number of attempts.
        default_max_try_time: The default time limit, in seconds or as
            a timedelta.
        default_try_interval: The default wait between two attempts, in
            seconds or as a timedelta.

    Raises:
        ValueError: If a default is out of its allowed range.

    Example:
        ```pycon
        >>> from aretry import RetryHelper
        >>> helper = RetryHelper(default_try_interval=0.01)
        >>> helper.default_max_try_count = 3
        >>> counter = iter(range(10))
        >>> helper.retry(lambda: next(counter)).until(lambda value: value == 2)
        2

        ```
    """

    _instance: ClassVar[RetryHelper | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        default_max_try_count: int = DEFAULT_MAX_TRY_COUNT,
        default_max_try_time: float | timedelta = DEFAULT_MAX_TRY_TIME,
        default_try_interval: float | timedelta = DEFAULT_TRY_INTERVAL,
    ) -> None:
        self.logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.default_max_try_count = default_max_try_count
        self.default_max_try_time = default_max_try_time
        self.default_try_interval = default_try_interval

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(logger={self.logger.name!r}, "
            f"default_max_try_count={self._default_max_try_count}, "
            f"default_max_try_time={self._default_max_try_time}, "
            f"default_try_interval={self._default_try_interval})"
        )

    @classmethod
    def instance(cls) -> RetryHelper:
        r"""Return the shared default helper, creating it on first use.

        Concurrent first calls from several threads all receive the same
        helper.

        Returns:
            The process-wide default helper.

        Example:
            ```pycon
            >>> from aretry import RetryHelper
            >>> RetryHelper.instance() is RetryHelper.instance()
            True

            ```
        """
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @property
    def default_max_try_count(self) -> int:
        """The maximum number of attempts of the created tasks."""
        return self._default_max_try_count

    @default_max_try_count.setter
    def default_max_try_count(self, value: int) -> None:
        validate_retry_params(max_try_count=value)
        self._default_max_try_count = value

    @property
    def default_max_try_time(self) -> float:
        """The time limit in seconds of the created tasks."""
        return self._default_max_try_time

    @default_max_try_time.setter
    def default_max_try_time(self, value: float | timedelta) -> None:
        seconds = to_seconds(value)
        validate_retry_params(max_try_time=seconds)
        self._default_max_try_time = seconds

    @property
    def default_try_interval(self) -> float:
        """The wait in seconds between two attempts of the created tasks."""
        return self._default_try_interval

    @default_try_interval.setter
    def default_try_interval(self, value: float | timedelta) -> None:
        seconds = to_seconds(value)
        validate_retry_params(try_interval=seconds)
        self._default_try_interval = seconds

    def _make_config(self, operation: Callable[[], Any]) -> RetryConfig:
        return RetryConfig(
            operation=operation,
            max_try_count=self._default_max_try_count,
            max_try_time=self._default_max_try_time,
            try_interval=self._default_try_interval,
        )

    def retry(self, operation: Callable[[], Any]) -> RetryTask[Any]:
        """Create a blocking retry task for an operation.

        Args:
            operation: A callable taking no argument. Use ``retry_async``
                for coroutine functions.

        Returns:
            A task initialised with the current defaults.

        Raises:
            TypeError: If the operation is not callable or is a
                coroutine function.
        """
        if inspect.iscoroutinefunction(operation):
            msg = (
                f"{operation.__qualname__} is a coroutine function; "
                "use retry_async to retry coroutine functions"
            )
            raise TypeError(msg)
        return RetryTask(self._make_config(operation), self.logger)

    def retry_async(
        self, operation: Callable[[], Awaitable[Any] | Any]
    ) -> AsyncRetryTask[Any]:
        """Create a suspending retry task for an operation.

        Args:
            operation: A coroutine function or a plain callable taking no
                argument.

        Returns:
            A task initialised with the current defaults.

        Raises:
            TypeError: If the operation is not callable.
        """
        return AsyncRetryTask(self._make_config(operation), self.logger)


def retry(operation: Callable[[], Any]) -> RetryTask[Any]:
    r"""Create a blocking retry task using the shared default helper.

    Args:
        operation: A callable taking no argument.

    Returns:
        A task initialised with the defaults of ``RetryHelper.instance()``.

    Example:
        ```pycon
        >>> from aretry import retry
        >>> attempts = []
        >>> def flaky():
        ...     attempts.append(1)
        ...     if len(attempts) < 3:
        ...         raise ConnectionError("unreachable")
        ...     return "ok"
        ...
        >>> retry(flaky).with_try_interval(0.01).until_no_exception(ConnectionError)
        'ok'
        >>> len(attempts)
        3

        ```
    """
    return RetryHelper.instance().retry(operation)


def retry_async(operation: Callable[[], Awaitable[Any] | Any]) -> AsyncRetryTask[Any]:
    """Create a suspending retry task using the shared default helper.

    Args:
        operation: A coroutine function or a plain callable taking no
            argument.

    Returns:
        A task initialised with the defaults of ``RetryHelper.instance()``.
    """
    return RetryHelper.instance().retry_async(operation)
