r"""Engine package implementing the retry loops.

This package provides a modular retry execution system: one state
machine shared by a blocking and a suspending executor, with separate
objects for configuration, completion decisions, budget tracking and
callback dispatch.

Public API:
    - RetryConfig: Immutable configuration of a retry loop
    - CallbackConfig: Immutable lifecycle callbacks
    - AttemptState: Mutable state of one loop invocation
    - RetryDecider: Completion and exception classification logic
    - BudgetTracker: Time and attempt limits
    - CallbackManager: Manager for callback invocations
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "AttemptState",
    "BudgetTracker",
    "CallbackConfig",
    "CallbackManager",
    "RetryConfig",
    "RetryDecider",
    "RetryExecutor",
]

from aretry.engine.budget import BudgetTracker
from aretry.engine.config import CallbackConfig, RetryConfig
from aretry.engine.decider import RetryDecider
from aretry.engine.executor import RetryExecutor
from aretry.engine.executor_async import AsyncRetryExecutor
from aretry.engine.manager import CallbackManager
from aretry.engine.state import AttemptState
