r"""Shared builder logic for both sync and async retry tasks.

This module provides the base class holding the fluent configuration
chain of RetryTask and AsyncRetryTask. Every chain method returns a new
task wrapping a new immutable configuration; the task it was called on
is left unchanged and stays reusable.
"""

from __future__ import annotations

__all__ = ["BaseRetryTask"]

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from aretry.callbacks import adapt_callback
from aretry.core.config import DEFAULT_LOGGER_NAME, to_seconds

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import timedelta
    from typing import Self

    from aretry.engine.config import RetryConfig

T = TypeVar("T")


class BaseRetryTask(Generic[T]):
    """Base class for the fluent retry task builders.

    Args:
        config: The immutable retry configuration.
        trace_logger: Logger receiving the diagnostic trace. Defaults to
            the ``aretry.trace`` logger.
    """

    def __init__(self, config: RetryConfig, trace_logger: logging.Logger | None = None) -> None:
        self._config = config
        self._trace_logger = trace_logger or logging.getLogger(DEFAULT_LOGGER_NAME)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(max_try_count={self._config.max_try_count}, "
            f"max_try_time={self._config.max_try_time}, "
            f"try_interval={self._config.try_interval})"
        )

    @property
    def config(self) -> RetryConfig:
        """The immutable configuration of this task."""
        return self._config

    @property
    def trace_logger(self) -> logging.Logger:
        """The logger receiving the diagnostic trace."""
        return self._trace_logger

    def _derive(self, config: RetryConfig) -> Self:
        return self.__class__(config, self._trace_logger)

    def with_try_interval(self, try_interval: float | timedelta) -> Self:
        """Configure the wait between two attempts.

        Args:
            try_interval: The wait, in seconds or as a timedelta.

        Returns:
            A new task with the updated interval.

        Raises:
            ValueError: If the interval is negative.
        """
        return self._derive(self._config.merge(try_interval=to_seconds(try_interval)))

    def with_max_try_count(self, max_try_count: int) -> Self:
        """Configure the maximum number of attempts.

        Args:
            max_try_count: The maximum number of attempts, >= 1.

        Returns:
            A new task with the updated limit.

        Raises:
            ValueError: If the count is lower than 1.
        """
        return self._derive(self._config.merge(max_try_count=max_try_count))

    def with_time_limit(self, max_try_time: float | timedelta) -> Self:
        """Configure the maximum total time of the loop.

        The time spent in the operation, the predicate, the callbacks
        and the waits all count against this limit.

        Args:
            max_try_time: The time limit, in seconds or as a timedelta.

        Returns:
            A new task with the updated limit.

        Raises:
            ValueError: If the limit is not positive.
        """
        return self._derive(self._config.merge(max_try_time=to_seconds(max_try_time)))

    def _add_callback(self, event: str, callback: Callable[..., Any]) -> Self:
        callbacks = self._config.callbacks.add(event, adapt_callback(callback))
        return self._derive(replace(self._config, callbacks=callbacks))

    def on_success(self, callback: Callable[..., Any]) -> Self:
        """Add a callback invoked when the loop succeeds.

        The attempt count passed to the callback includes the successful
        attempt.

        Args:
            callback: A callable taking ``()``, ``(result)`` or
                ``(result, try_count)``.

        Returns:
            A new task with the callback appended.
        """
        return self._add_callback("on_success", callback)

    def on_failure(self, callback: Callable[..., Any]) -> Self:
        """Add a callback invoked after each failed attempt, before
        waiting for the next one.

        The result is None when the failed attempt raised a tolerated
        exception.

        Args:
            callback: A callable taking ``()``, ``(result)`` or
                ``(result, try_count)``.

        Returns:
            A new task with the callback appended.
        """
        return self._add_callback("on_failure", callback)

    def on_timeout(self, callback: Callable[..., Any]) -> Self:
        """Add a callback invoked when the time or count budget is
        exceeded, before ``RetryTimeoutError`` is raised.

        Args:
            callback: A callable taking ``()``, ``(result)`` or
                ``(result, try_count)``. The result is the one of the last
                attempt, or None if it raised.

        Returns:
            A new task with the callback appended.
        """
        return self._add_callback("on_timeout", callback)
