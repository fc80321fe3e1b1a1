r"""Utility helpers shared by the retry engines.

This package currently provides the structured logging helpers used by
the diagnostic trace of retry loops.
"""

from __future__ import annotations

__all__ = [
    "JsonTraceFormatter",
    "correlation_scope",
    "current_correlation_id",
    "log_structured",
]

from aretry.utils.structured_logging import (
    JsonTraceFormatter,
    correlation_scope,
    current_correlation_id,
    log_structured,
)
