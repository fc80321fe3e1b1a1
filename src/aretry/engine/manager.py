r"""Callback manager for orchestrating retry lifecycle events.

This module provides the CallbackManager class that invokes the
registered lifecycle callbacks, in registration order, for both the
blocking and the suspending engines.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

import inspect
from typing import TYPE_CHECKING, Any

from aretry.callbacks import ensure_not_awaitable

if TYPE_CHECKING:
    from aretry.engine.config import CallbackConfig

EVENTS = ("on_success", "on_failure", "on_timeout")


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    Callbacks are invoked strictly one after the other. An exception
    raised by a callback is not caught: it propagates to the caller and
    the remaining callbacks of that event are skipped.

    Attributes:
        callbacks: Configuration containing the callbacks per event.
    """

    def __init__(self, callbacks: CallbackConfig) -> None:
        self.callbacks = callbacks

    def _get(self, event: str) -> tuple:
        if event not in EVENTS:
            msg = f"Unknown callback event: {event!r}"
            raise ValueError(msg)
        return getattr(self.callbacks, event)

    def fire(self, event: str, result: Any, try_count: int) -> None:
        """Invoke the callbacks of an event from a blocking loop.

        Args:
            event: One of ``"on_success"``, ``"on_failure"`` or
                ``"on_timeout"``.
            result: The attempt result passed to the callbacks.
            try_count: The attempt count passed to the callbacks.

        Raises:
            TypeError: If a callback returns an awaitable.
        """
        for callback in self._get(event):
            ensure_not_awaitable(callback(result, try_count), f"{event} callback")

    async def fire_async(self, event: str, result: Any, try_count: int) -> None:
        """Invoke the callbacks of an event from a suspending loop.

        Callbacks returning an awaitable are awaited before the next one
        is invoked.

        Args:
            event: One of ``"on_success"``, ``"on_failure"`` or
                ``"on_timeout"``.
            result: The attempt result passed to the callbacks.
            try_count: The attempt count passed to the callbacks.
        """
        for callback in self._get(event):
            outcome = callback(result, try_count)
            if inspect.isawaitable(outcome):
                await outcome
