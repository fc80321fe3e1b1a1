r"""Completion and exception classification logic for retry loops.

This module provides the RetryDecider class that decides, for one loop
invocation, whether an attempt's result completes the loop and whether
an exception raised by an attempt is tolerated or fatal.
"""

from __future__ import annotations

__all__ = ["FATAL_EXCEPTIONS", "RetryDecider"]

import logging
from typing import TYPE_CHECKING

from aretry.callbacks import adapt_predicate
from aretry.core.validation import validate_exception_types
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from aretry.callbacks import Predicate

logger: logging.Logger = logging.getLogger(__name__)

# Resource exhaustion and interpreter corruption are never retried
FATAL_EXCEPTIONS: tuple[type[Exception], ...] = (MemoryError, RecursionError, SystemError)


class RetryDecider:
    """Decides whether a retry loop completes, continues or fails.

    A decider works in one of two completion modes:

    - predicate mode: the loop completes when ``predicate(result)`` is
      true, and any exception raised by an attempt is fatal;
    - no-exception mode: the loop completes as soon as an attempt returns,
      and exceptions matching ``exception_types`` are tolerated.

    Use :meth:`until` and :meth:`until_no_exception` to build one.

    Args:
        predicate: Canonical completion predicate, or None for the
            no-exception mode.
        retry_on_exception: Whether exceptions may be tolerated.
        exception_types: Exception classes tolerated when
            ``retry_on_exception`` is set. Subclasses match.
        trace_logger: Logger receiving the diagnostic trace.
    """

    def __init__(
        self,
        predicate: Predicate | None = None,
        retry_on_exception: bool = False,
        exception_types: tuple[type[Exception], ...] = (Exception,),
        trace_logger: logging.Logger = logger,
    ) -> None:
        self.predicate = predicate
        self.retry_on_exception = retry_on_exception
        self.exception_types = exception_types
        self.trace_logger = trace_logger

    @classmethod
    def until(
        cls, predicate: Callable[..., Any], trace_logger: logging.Logger = logger
    ) -> RetryDecider:
        """Create a decider for the predicate mode.

        Args:
            predicate: The completion condition, taking the attempt's
                result or no argument.
            trace_logger: Logger receiving the diagnostic trace.

        Returns:
            A decider that tolerates no exception.

        Example:
            ```pycon
            >>> from aretry.engine.decider import RetryDecider
            >>> decider = RetryDecider.until(lambda result: result > 3)
            >>> decider.retry_on_exception
            False

            ```
        """
        return cls(predicate=adapt_predicate(predicate), trace_logger=trace_logger)

    @classmethod
    def until_no_exception(
        cls,
        *exception_types: type[Exception],
        trace_logger: logging.Logger = logger,
    ) -> RetryDecider:
        """Create a decider for the no-exception mode.

        Args:
            *exception_types: Exception classes to tolerate. Defaults to
                ``Exception``, i.e. any non-fatal exception.
            trace_logger: Logger receiving the diagnostic trace.

        Returns:
            A decider that completes on the first attempt that returns.

        Raises:
            TypeError: If an exception type is not an Exception subclass.

        Example:
            ```pycon
            >>> from aretry.engine.decider import RetryDecider
            >>> decider = RetryDecider.until_no_exception(ValueError)
            >>> decider.should_raise(KeyError("missing"))
            True
            >>> decider.should_raise(ValueError("bad"))
            False

            ```
        """
        exception_types = exception_types or (Exception,)
        validate_exception_types(exception_types)
        return cls(
            predicate=None,
            retry_on_exception=True,
            exception_types=exception_types,
            trace_logger=trace_logger,
        )

    @property
    def needs_evaluation(self) -> bool:
        """Whether returned results must be checked by a predicate."""
        return self.predicate is not None

    def should_raise(self, exception: Exception) -> bool:
        """Classify an exception raised by an attempt.

        Args:
            exception: The exception raised by the operation.

        Returns:
            True if the exception is fatal and must propagate, False if it
            is tolerated and the loop may continue.
        """
        exc_name = type(exception).__name__
        if (
            isinstance(exception, FATAL_EXCEPTIONS)
            or not self.retry_on_exception
            or not isinstance(exception, self.exception_types)
        ):
            log_structured(
                self.trace_logger,
                logging.ERROR,
                f"{exc_name} detected when trying; raising...",
                exception_type=exc_name,
            )
            return True

        log_structured(
            self.trace_logger,
            logging.DEBUG,
            f"{exc_name} detected when trying; continue trying...; details: {exception}",
            exception_type=exc_name,
        )
        return False
