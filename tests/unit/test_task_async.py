r"""Unit tests for the suspending retry task."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, call

import pytest

from aretry import AsyncRetryTask, RetryTimeoutError
from aretry.engine import RetryConfig
from tests.helpers import AsyncGenerator, Generator

if TYPE_CHECKING:
    from tests.helpers import FakeClock


def create_task(operation: object, **kwargs: object) -> AsyncRetryTask:
    kwargs.setdefault("try_interval", 0.1)
    return AsyncRetryTask(RetryConfig(operation=operation, **kwargs))


#############################################
#     Tests for the configuration chain     #
#############################################


def test_async_retry_task_chain_returns_async_task() -> None:
    task = (
        create_task(AsyncMock())
        .with_try_interval(timedelta(milliseconds=50))
        .with_max_try_count(3)
        .with_time_limit(10)
        .on_success(Mock())
    )
    assert isinstance(task, AsyncRetryTask)
    assert task.config.try_interval == pytest.approx(0.05)
    assert task.config.max_try_count == 3
    assert task.config.max_try_time == 10.0
    assert len(task.config.callbacks.on_success) == 1


def test_async_retry_task_chain_is_immutable() -> None:
    task = create_task(AsyncMock())
    task.with_max_try_count(2).on_failure(Mock())
    assert task.config.max_try_count != 2
    assert task.config.callbacks.on_failure == ()


def test_async_retry_task_repr() -> None:
    task = create_task(AsyncMock(), max_try_count=2, max_try_time=1.0)
    assert repr(task) == "AsyncRetryTask(max_try_count=2, max_try_time=1.0, try_interval=0.1)"


###########################
#     Tests for until     #
###########################


@pytest.mark.asyncio
async def test_async_retry_task_until(mock_asleep: Mock) -> None:
    operation = AsyncMock(side_effect=[0.5, 0.3, 0.05])
    assert await create_task(operation).until(lambda value: value < 0.1) == 0.05
    assert operation.await_count == 3
    assert mock_asleep.await_count == 2


@pytest.mark.asyncio
@pytest.mark.usefixtures("mock_asleep")
async def test_async_retry_task_until_plain_operation() -> None:
    operation = Generator(failures=2)
    assert await create_task(operation).until(lambda value: value) is True
    assert operation.call_count == 3


@pytest.mark.asyncio
@pytest.mark.usefixtures("mock_asleep")
async def test_async_retry_task_until_async_predicate() -> None:
    operation = AsyncGenerator(failures=100)
    checks = []

    async def ready() -> bool:
        checks.append(1)
        return len(checks) == 3

    assert await create_task(operation).until(ready) is False
    assert operation.call_count == 3


@pytest.mark.asyncio
@pytest.mark.usefixtures("mock_asleep")
async def test_async_retry_task_until_exception_is_fatal() -> None:
    operation = AsyncGenerator(failures=3, exception=RuntimeError)
    with pytest.raises(RuntimeError, match=r"attempt 1 failed"):
        await create_task(operation).until(lambda value: value)
    assert operation.call_count == 1


@pytest.mark.asyncio
@pytest.mark.usefixtures("mock_asleep")
async def test_async_retry_task_until_count_exceeded() -> None:
    operation = AsyncMock(return_value=0.5)
    with pytest.raises(RetryTimeoutError) as exc_info:
        await create_task(operation, max_try_count=3).until(lambda value: value < 0.1)
    assert exc_info.value.try_count == 3
    assert exc_info.value.last_result == 0.5


@pytest.mark.asyncio
async def test_async_retry_task_until_time_exceeded(fake_clock: FakeClock) -> None:
    operation = AsyncGenerator(failures=100)
    task = create_task(operation).with_time_limit(0.45)
    with pytest.raises(RetryTimeoutError, match=r"maximum try time 0.45s") as exc_info:
        await task.until(lambda value: value)
    assert exc_info.value.try_count == 6
    assert operation.call_count == 6
    assert len(fake_clock.sleeps) == 5


########################################
#     Tests for until_no_exception     #
########################################


@pytest.mark.asyncio
async def test_async_retry_task_until_no_exception(mock_asleep: Mock) -> None:
    operation = AsyncGenerator(failures=2, exception=ConnectionError)
    assert await create_task(operation).until_no_exception(ConnectionError) is True
    assert operation.call_count == 3
    assert mock_asleep.await_count == 2


@pytest.mark.asyncio
@pytest.mark.usefixtures("mock_asleep")
async def test_async_retry_task_until_no_exception_unlisted_exception() -> None:
    operation = AsyncGenerator(failures=2, exception=TypeError)
    with pytest.raises(TypeError, match=r"attempt 1 failed"):
        await create_task(operation).until_no_exception(ValueError)


@pytest.mark.asyncio
@pytest.mark.usefixtures("mock_asleep")
async def test_async_retry_task_until_no_exception_count_exceeded() -> None:
    operation = AsyncGenerator(failures=10, exception=ConnectionError)
    with pytest.raises(RetryTimeoutError) as exc_info:
        await create_task(operation, max_try_count=2).until_no_exception(ConnectionError)
    assert str(exc_info.value.__cause__) == "attempt 2 failed"


@pytest.mark.asyncio
async def test_async_retry_task_until_no_exception_invalid_type() -> None:
    with pytest.raises(TypeError, match=r"Expected an Exception subclass"):
        await create_task(AsyncMock()).until_no_exception(KeyboardInterrupt)


###############################
#     Tests for callbacks     #
###############################


@pytest.mark.asyncio
@pytest.mark.usefixtures("mock_asleep")
async def test_async_retry_task_callbacks() -> None:
    events = []

    async def on_failure(result: bool, try_count: int) -> None:
        events.append(("failure", result, try_count))

    task = (
        create_task(AsyncGenerator(failures=2))
        .on_failure(on_failure)
        .on_success(lambda result: events.append(("success", result)))
    )
    assert await task.until(lambda value: value) is True
    assert events == [("failure", False, 1), ("failure", False, 2), ("success", True)]


@pytest.mark.asyncio
@pytest.mark.usefixtures("mock_asleep")
async def test_async_retry_task_timeout_callback() -> None:
    on_timeout = AsyncMock()
    task = create_task(AsyncGenerator(failures=10), max_try_count=2).on_timeout(on_timeout)
    with pytest.raises(RetryTimeoutError):
        await task.until(lambda value: value)
    assert on_timeout.await_args_list == [call(False, 2)]


@pytest.mark.asyncio
@pytest.mark.usefixtures("mock_asleep")
async def test_async_retry_task_zero_argument_async_callback() -> None:
    calls = []

    async def notify() -> None:
        calls.append("notified")

    await create_task(AsyncGenerator(failures=0)).on_success(notify).until(lambda value: value)
    assert calls == ["notified"]


##################################
#     Tests for cancellation     #
##################################


@pytest.mark.asyncio
async def test_async_retry_task_cancellation() -> None:
    operation = AsyncGenerator(failures=100)
    task = asyncio.create_task(
        create_task(operation, try_interval=10.0).until(lambda value: value)
    )
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert operation.call_count == 1


@pytest.mark.asyncio
async def test_async_retry_task_does_not_block_event_loop() -> None:
    ticks = []

    async def ticker() -> None:
        for _ in range(3):
            ticks.append(1)
            await asyncio.sleep(0.01)

    retry_task = create_task(AsyncGenerator(failures=3), try_interval=0.02)
    result, _ = await asyncio.gather(retry_task.until(lambda value: value), ticker())
    assert result is True
    assert len(ticks) == 3


#############################
#     Tests for logging     #
#############################


@pytest.mark.asyncio
@pytest.mark.usefixtures("mock_asleep")
async def test_async_retry_task_logs_to_trace_logger(caplog: pytest.LogCaptureFixture) -> None:
    trace_logger = logging.getLogger("tests.task_async.trace")
    task = AsyncRetryTask(RetryConfig(operation=AsyncGenerator(failures=0)), trace_logger)
    with caplog.at_level(logging.DEBUG, logger="tests.task_async.trace"):
        await task.until(lambda value: value)
    assert [record.name for record in caplog.records] == ["tests.task_async.trace"] * 3
    assert caplog.messages[-1].startswith("Trying succeeded after time")
