r"""aretry - Retry an operation until a condition holds or a budget runs out.

This package repeatedly invokes an operation until its result satisfies
a predicate, or until it stops raising, within a maximum number of
attempts and a maximum total time. Tasks are configured through an
immutable fluent API and run either on the calling thread or inside a
coroutine.

Key Features:
    - Fluent, immutable and reusable task configuration
    - Predicate mode and no-exception mode with exception type filters
    - Attempt count and total time limits, with a fixed wait between attempts
    - Success, failure and timeout callbacks
    - Full async support, including coroutine predicates and callbacks
    - Process-wide defaults through a lazily created shared helper
    - Diagnostic trace through the standard ``logging`` module

Example:
    ```pycon
    >>> from aretry import RetryTimeoutError, retry
    >>> task = retry(lambda: 0.5).with_try_interval(0.01).with_max_try_count(3)
    >>> try:
    ...     task.until(lambda value: value < 0.1)
    ... except RetryTimeoutError as exc:
    ...     print(exc.try_count)
    ...
    3

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryTask",
    "RetryHelper",
    "RetryTask",
    "RetryTimeoutError",
    "__version__",
    "retry",
    "retry_async",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.exceptions import RetryTimeoutError
from aretry.helper import RetryHelper, retry, retry_async
from aretry.task import RetryTask
from aretry.task_async import AsyncRetryTask

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
