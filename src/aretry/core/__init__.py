r"""Core shared logic for sync and async retry tasks.

This module contains shared functionality used by both the blocking and
the suspending retry tasks, including the default limits, parameter
validation and the fluent configuration chain.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_LOGGER_NAME",
    "DEFAULT_MAX_TRY_COUNT",
    "DEFAULT_MAX_TRY_TIME",
    "DEFAULT_TRY_INTERVAL",
    "BaseRetryTask",
    "to_seconds",
    "validate_exception_types",
    "validate_retry_params",
]


from aretry.core.config import (
    DEFAULT_LOGGER_NAME,
    DEFAULT_MAX_TRY_COUNT,
    DEFAULT_MAX_TRY_TIME,
    DEFAULT_TRY_INTERVAL,
    to_seconds,
)
from aretry.core.task_logic import BaseRetryTask
from aretry.core.validation import validate_exception_types, validate_retry_params
