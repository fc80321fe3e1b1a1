r"""Configuration dataclasses for retry behavior.

This module provides the immutable configuration records shared by the
sync and async engines. Both are frozen: deriving a new configuration
goes through ``dataclasses.replace`` so that a configuration handed to a
running loop can never change under it.
"""

from __future__ import annotations

__all__ = ["CallbackConfig", "RetryConfig"]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from aretry.core.config import (
    DEFAULT_MAX_TRY_COUNT,
    DEFAULT_MAX_TRY_TIME,
    DEFAULT_TRY_INTERVAL,
)
from aretry.core.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.callbacks import Callback


@dataclass(frozen=True)
class CallbackConfig:
    """Configuration for lifecycle callbacks.

    Every callback uses the canonical ``(result, try_count)`` signature.
    Callbacks of the same kind fire in registration order.

    Attributes:
        on_success: Callbacks invoked once when the loop succeeds.
        on_failure: Callbacks invoked after each failed attempt, before
            waiting for the next one.
        on_timeout: Callbacks invoked once when the budget is exceeded.
    """

    on_success: tuple[Callback, ...] = ()
    on_failure: tuple[Callback, ...] = ()
    on_timeout: tuple[Callback, ...] = ()

    def add(self, event: str, callback: Callback) -> CallbackConfig:
        """Return a copy with ``callback`` appended to the given event.

        Args:
            event: One of ``"on_success"``, ``"on_failure"`` or
                ``"on_timeout"``.
            callback: The canonical callback to append.

        Returns:
            A new CallbackConfig; this one is unchanged.

        Raises:
            ValueError: If the event name is unknown.

        Example:
            ```pycon
            >>> from aretry.engine.config import CallbackConfig
            >>> config = CallbackConfig()
            >>> derived = config.add("on_success", print)
            >>> len(derived.on_success), len(config.on_success)
            (1, 0)

            ```
        """
        if event not in ("on_success", "on_failure", "on_timeout"):
            msg = f"Unknown callback event: {event!r}"
            raise ValueError(msg)
        return replace(self, **{event: (*getattr(self, event), callback)})


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        operation: The zero-argument callable invoked on each attempt.
        max_try_count: Maximum number of attempts.
        max_try_time: Maximum total time in seconds for the whole loop.
        try_interval: Wait in seconds between two attempts.
        callbacks: Lifecycle callbacks.

    Example:
        ```pycon
        >>> from aretry.engine.config import RetryConfig
        >>> config = RetryConfig(operation=lambda: 42, max_try_count=3)
        >>> config.try_interval
        0.5
        >>> config.merge(try_interval=0.1).try_interval
        0.1
        >>> config.try_interval  # Original unchanged
        0.5

        ```
    """

    operation: Callable[[], Any]
    max_try_count: int = DEFAULT_MAX_TRY_COUNT
    max_try_time: float = DEFAULT_MAX_TRY_TIME
    try_interval: float = DEFAULT_TRY_INTERVAL
    callbacks: CallbackConfig = field(default_factory=CallbackConfig)

    def __post_init__(self) -> None:
        if not callable(self.operation):
            msg = f"operation must be callable, got {type(self.operation).__name__}"
            raise TypeError(msg)
        validate_retry_params(
            max_try_count=self.max_try_count,
            max_try_time=self.max_try_time,
            try_interval=self.try_interval,
        )

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with the given fields overridden.

        Args:
            **overrides: Fields to override. ``None`` values are ignored.

        Returns:
            A new, validated RetryConfig sharing the same operation.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
