r"""Shared core logic for retry executors.

The retry state machine is written once, as a generator, and driven by
the synchronous and asynchronous executors. The generator never calls
user code itself: it yields steps describing what to do next and the
executor performs each step in its own concurrency model.

Steps and the value the executor sends back:

- ``Attempt``: invoke the operation once; send its result, or throw the
  exception it raised into the generator if the decider tolerates it.
  Fatal exceptions are raised by the executor itself, so they never pass
  through the generator frame.
- ``Evaluate``: evaluate the completion predicate on a result; send the
  outcome.
- ``Notify``: invoke the callbacks registered for an event; send None.
- ``Wait``: wait before the next attempt; send None.

When the generator returns, its return value is the loop's result.
``RetryTimeoutError`` propagates out of it.
"""

from __future__ import annotations

__all__ = ["ATTEMPT", "Attempt", "Evaluate", "Notify", "Step", "Wait", "retry_loop"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from aretry.engine.budget import BudgetTracker
from aretry.exceptions import RetryTimeoutError
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Generator

    from aretry.engine.config import RetryConfig
    from aretry.engine.decider import RetryDecider


@dataclass(frozen=True)
class Attempt:
    """Invoke the operation once."""


@dataclass(frozen=True)
class Evaluate:
    """Evaluate the completion predicate on an attempt's result."""

    result: Any


@dataclass(frozen=True)
class Notify:
    """Invoke the callbacks registered for ``event``."""

    event: str
    result: Any
    try_count: int


@dataclass(frozen=True)
class Wait:
    """Wait ``seconds`` before the next attempt."""

    seconds: float


ATTEMPT = Attempt()

Step = Union[Attempt, Evaluate, Notify, Wait]


def retry_loop(
    config: RetryConfig,
    decider: RetryDecider,
    trace_logger: logging.Logger,
) -> Generator[Step, Any, Any]:
    """Run the retry state machine for one loop invocation.

    Args:
        config: The retry configuration.
        decider: The completion and exception policy of this invocation.
        trace_logger: Logger receiving the diagnostic trace.

    Yields:
        The steps the executor must perform.

    Returns:
        The result of the successful attempt.

    Raises:
        RetryTimeoutError: If the time or count budget is exceeded. The
            last tolerated exception, if any, is chained as the cause.
    """
    tracker = BudgetTracker(config.max_try_count, config.max_try_time)
    state = tracker.start()
    log_structured(
        trace_logger,
        logging.DEBUG,
        f"Starting trying with max try time {config.max_try_time}s "
        f"and max try count {config.max_try_count}.",
        max_try_time=config.max_try_time,
        max_try_count=config.max_try_count,
    )

    while True:
        elapsed_time = state.elapsed_time
        log_structured(
            trace_logger,
            logging.DEBUG,
            f"Trying time {state.try_count + 1}, elapsed time {elapsed_time:.3f}s.",
            try_count=state.try_count + 1,
            elapsed_time=elapsed_time,
        )
        state.last_result = None
        try:
            state.last_result = yield ATTEMPT
        except Exception as exc:  # noqa: BLE001
            state.last_exception = exc
        else:
            completed = True
            if decider.needs_evaluation:
                completed = bool((yield Evaluate(state.last_result)))
            if completed:
                elapsed_time = state.elapsed_time
                log_structured(
                    trace_logger,
                    logging.DEBUG,
                    f"Trying succeeded after time {elapsed_time:.3f}s "
                    f"and total try count {state.try_count + 1}.",
                    try_count=state.try_count + 1,
                    elapsed_time=elapsed_time,
                )
                yield Notify("on_success", state.last_result, state.try_count + 1)
                return state.last_result

        exceeded = tracker.check(state)
        if exceeded is not None:
            break
        yield Notify("on_failure", state.last_result, state.try_count)
        yield Wait(config.try_interval)

    # The count is only incremented when the time budget allows it
    try_count = state.try_count if exceeded.limit == "count" else state.try_count + 1
    elapsed_time = state.elapsed_time
    log_structured(
        trace_logger,
        logging.WARNING,
        exceeded.message,
        try_count=try_count,
        elapsed_time=elapsed_time,
    )
    yield Notify("on_timeout", state.last_result, try_count)
    raise RetryTimeoutError(
        exceeded.message,
        limit=exceeded.limit,
        try_count=try_count,
        elapsed_time=elapsed_time,
        last_result=state.last_result,
    ) from state.last_exception
