r"""Callback and predicate adapters for retry tasks.

Lifecycle callbacks can be registered in several shapes, and all of
them are normalised once, at registration time, into the canonical
``(result, try_count)`` signature used by the engines:

- ``callback()``: no argument
- ``callback(result)``: result of the attempt only
- ``callback(result, try_count)``: result and attempt count

Each shape may also be an ``async def`` function when used with an
``AsyncRetryTask``; the async engine awaits whatever the adapted
callable returns.

Completion predicates follow the same idea with two shapes:
``predicate(result)`` and ``predicate()``, the latter being an external
condition that ignores the attempt's result.

Example:
    ```pycon
    >>> from aretry.callbacks import adapt_callback, adapt_predicate
    >>> seen = []
    >>> callback = adapt_callback(lambda result: seen.append(result))
    >>> callback("value", 3)
    >>> seen
    ['value']
    >>> predicate = adapt_predicate(lambda: True)
    >>> predicate("ignored")
    True

    ```
"""

from __future__ import annotations

__all__ = [
    "Callback",
    "Predicate",
    "adapt_callback",
    "adapt_predicate",
    "count_positional_params",
    "ensure_not_awaitable",
]

import inspect
from collections.abc import Callable
from typing import Any

# Canonical callback: (result, try_count) -> None, or an awaitable for async tasks
Callback = Callable[[Any, int], Any]

# Canonical predicate: (result) -> bool, or an awaitable for async tasks
Predicate = Callable[[Any], Any]


def count_positional_params(func: Callable[..., Any]) -> int | None:
    """Count the positional parameters a callable accepts.

    Args:
        func: The callable to inspect.

    Returns:
        The number of positional parameters without a default value, or
        None if the callable takes ``*args`` or its signature cannot be
        inspected.

    Example:
        ```pycon
        >>> from aretry.callbacks import count_positional_params
        >>> count_positional_params(lambda: None)
        0
        >>> count_positional_params(lambda result, count: None)
        2
        >>> count_positional_params(lambda *args: None) is None
        True

        ```
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None

    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if (
            param.kind
            in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            and param.default is inspect.Parameter.empty
        ):
            count += 1
    return count


def _check_callable(func: Any, name: str) -> None:
    if not callable(func):
        msg = f"{name} must be callable, got {type(func).__name__}"
        raise TypeError(msg)


def adapt_callback(callback: Callable[..., Any]) -> Callback:
    """Wrap a callback into the canonical ``(result, try_count)``
    signature.

    Args:
        callback: A callable taking no argument, the result only, or the
            result and the attempt count. Callables taking ``*args`` or
            with an uninspectable signature receive both arguments.

    Returns:
        A callable taking ``(result, try_count)`` and returning whatever
        the original callback returns (possibly an awaitable).

    Raises:
        TypeError: If the callback is not callable or requires more than
            two positional arguments.
    """
    _check_callable(callback, "callback")
    num_params = count_positional_params(callback)
    if num_params is None or num_params == 2:
        return callback
    if num_params == 0:
        return lambda result, try_count: callback()  # noqa: ARG005
    if num_params == 1:
        return lambda result, try_count: callback(result)  # noqa: ARG005
    msg = f"callback must accept at most 2 positional arguments, got {num_params}"
    raise TypeError(msg)


def ensure_not_awaitable(value: Any, name: str) -> Any:
    """Reject an awaitable produced in a blocking retry loop.

    A blocking loop cannot await, so a coroutine returned by the
    operation, the predicate or a callback is closed and reported.

    Args:
        value: The value returned by the user function.
        name: What produced the value, used in the error message.

    Returns:
        The value, unchanged, if it is not awaitable.

    Raises:
        TypeError: If the value is awaitable.
    """
    if inspect.isawaitable(value):
        if inspect.iscoroutine(value):
            value.close()
        msg = f"The {name} returned an awaitable; use retry_async to retry coroutine functions"
        raise TypeError(msg)
    return value


def adapt_predicate(predicate: Callable[..., Any]) -> Predicate:
    """Wrap a completion predicate into the canonical ``(result)``
    signature.

    Args:
        predicate: A callable taking the attempt's result, or no
            argument at all for an external condition.

    Returns:
        A callable taking the result and returning the predicate's
        outcome (possibly an awaitable).

    Raises:
        TypeError: If the predicate is not callable or requires more
            than one positional argument.
    """
    _check_callable(predicate, "predicate")
    num_params = count_positional_params(predicate)
    if num_params is None or num_params == 1:
        return predicate
    if num_params == 0:
        return lambda result: predicate()  # noqa: ARG005
    msg = f"predicate must accept at most 1 positional argument, got {num_params}"
    raise TypeError(msg)
