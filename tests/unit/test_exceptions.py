r"""Unit tests for the retry exceptions."""

from __future__ import annotations

import pytest

from aretry import RetryTimeoutError


def create_error(**kwargs: object) -> RetryTimeoutError:
    params = {"limit": "count", "try_count": 3, "elapsed_time": 1.5}
    params.update(kwargs)
    return RetryTimeoutError(
        "The maximum try count 3 for the operation has been exceeded.", **params
    )


def test_retry_timeout_error_is_timeout_error() -> None:
    assert isinstance(create_error(), TimeoutError)


def test_retry_timeout_error_attributes() -> None:
    error = create_error(last_result="pending")
    assert error.message == "The maximum try count 3 for the operation has been exceeded."
    assert error.limit == "count"
    assert error.try_count == 3
    assert error.elapsed_time == 1.5
    assert error.last_result == "pending"


def test_retry_timeout_error_last_result_default() -> None:
    assert create_error().last_result is None


def test_retry_timeout_error_str() -> None:
    assert str(create_error()) == "The maximum try count 3 for the operation has been exceeded."


def test_retry_timeout_error_args() -> None:
    assert create_error().args == (
        "The maximum try count 3 for the operation has been exceeded.",
    )


def test_retry_timeout_error_can_be_caught_as_timeout_error() -> None:
    with pytest.raises(TimeoutError, match=r"maximum try count 3"):
        raise create_error()


def test_retry_timeout_error_requires_keyword_arguments() -> None:
    with pytest.raises(TypeError):
        RetryTimeoutError("message", "count", 3, 1.5)  # type: ignore[misc]
