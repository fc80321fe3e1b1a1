r"""Unit tests for the attempt state."""

from __future__ import annotations

from aretry.engine import AttemptState
from tests.helpers import FakeClock


def test_attempt_state_defaults() -> None:
    state = AttemptState(start_time=1.0)
    assert state.start_time == 1.0
    assert state.try_count == 0
    assert state.last_result is None
    assert state.last_exception is None


def test_attempt_state_elapsed_time(fake_clock: FakeClock) -> None:
    fake_clock.advance(10.0)
    state = AttemptState(start_time=4.0)
    assert state.elapsed_time == 6.0
    fake_clock.advance(1.5)
    assert state.elapsed_time == 7.5
