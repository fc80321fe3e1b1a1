r"""Structured logging utilities for the retry diagnostic trace.

Every retry loop reports to a trace logger (``aretry.trace`` by default,
or the logger given to ``RetryHelper``). The entries carry structured
fields such as ``try_count`` and ``elapsed_time`` as attributes of the
log record. This module provides a JSON formatter that renders them,
and a correlation scope to tell concurrent loops apart.

The JSON output is opt-in: attach the formatter to a handler of the
trace logger.

Example:
    ```python
    import logging
    from aretry import retry
    from aretry.utils.structured_logging import JsonTraceFormatter, correlation_scope

    handler = logging.StreamHandler()
    handler.setFormatter(JsonTraceFormatter())
    trace_logger = logging.getLogger("aretry.trace")
    trace_logger.addHandler(handler)
    trace_logger.setLevel(logging.DEBUG)

    with correlation_scope("job-123"):
        retry(fetch_status).with_max_try_count(5).until(lambda status: status == "done")
    ```
"""

from __future__ import annotations

__all__ = [
    "JsonTraceFormatter",
    "correlation_scope",
    "current_correlation_id",
    "log_structured",
]

import contextvars
import json
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

# Task-local in asyncio, thread-local otherwise
_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "aretry_correlation_id", default=None
)

# Attributes every LogRecord has; anything else was passed through ``extra``
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def current_correlation_id() -> str | None:
    """Return the correlation ID of the enclosing scope, if any."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    r"""Tag the trace entries emitted inside the block.

    Scopes nest: leaving a scope restores the ID of the enclosing one.

    Args:
        correlation_id: The ID rendered in every JSON entry of the block.

    Yields:
        The correlation ID.

    Example:
        ```pycon
        >>> from aretry.utils.structured_logging import (
        ...     correlation_scope,
        ...     current_correlation_id,
        ... )
        >>> with correlation_scope("job-1"):
        ...     with correlation_scope("job-1.poll"):
        ...         print(current_correlation_id())
        ...     print(current_correlation_id())
        ...
        job-1.poll
        job-1
        >>> current_correlation_id() is None
        True

        ```
    """
    token = _correlation_id.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)


class JsonTraceFormatter(logging.Formatter):
    """Render trace entries as one JSON object per line.

    Keys of the JSON output:
        - time: ISO 8601 UTC timestamp with milliseconds
        - level, logger, message
        - location: ``module:function:line`` of the emitting code
        - correlation_id: only inside a ``correlation_scope``
        - fields: the structured fields attached to the entry, if any
        - exception: the formatted traceback, if any

    Values JSON cannot encode are rendered with ``str``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from io import StringIO
        >>> from aretry.utils.structured_logging import JsonTraceFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(JsonTraceFormatter())
        >>> trace_logger = logging.getLogger("doctest_trace")
        >>> trace_logger.addHandler(handler)
        >>> trace_logger.warning("Budget exceeded", extra={"try_count": 5})
        >>> json.loads(stream.getvalue())["fields"]
        {'try_count': 5}

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        correlation_id = current_correlation_id()
        if correlation_id is not None:
            entry["correlation_id"] = correlation_id

        fields = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES
        }
        if fields:
            entry["fields"] = fields
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)

    def formatTime(  # noqa: N802
        self, record: logging.LogRecord, datefmt: str | None = None
    ) -> str:
        if datefmt is not None:
            return super().formatTime(record, datefmt)
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return created.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **fields: Any,
) -> None:
    """Emit a trace entry carrying structured fields.

    The fields become attributes of the log record, and the entry's
    location is the caller of this function.

    Args:
        logger: The trace logger.
        level: The logging level, e.g. ``logging.DEBUG``.
        message: The human-readable message.
        **fields: The structured fields. Names must not clash with
            ``LogRecord`` attributes.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra=fields, stacklevel=2)
