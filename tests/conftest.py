from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from aretry import RetryHelper
from tests.helpers import FakeClock

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def fake_clock() -> Generator[FakeClock, None, None]:
    """Replace the loop clock and both sleeps with a virtual clock.

    Sleeping advances the virtual time instantly, so time budgets can be
    tested deterministically.
    """
    clock = FakeClock()
    with (
        patch("time.perf_counter", side_effect=clock.perf_counter),
        patch("time.sleep", side_effect=clock.sleep),
        patch("asyncio.sleep", side_effect=clock.asleep),
    ):
        yield clock


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks.

    A Mock accepts any arguments, so it always receives the canonical
    ``(result, try_count)`` call.

    Returns:
        A Mock object that can be used as a callback function.
    """
    return Mock()


@pytest.fixture
def fresh_default_helper(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make ``RetryHelper.instance()`` build a new shared helper."""
    monkeypatch.setattr(RetryHelper, "_instance", None)
