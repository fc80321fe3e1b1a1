r"""Shared test helpers for retry loop tests."""

from __future__ import annotations

__all__ = ["AsyncGenerator", "FakeClock", "Generator"]


class FakeClock:
    """Virtual clock advanced only by sleeping or by ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def perf_counter(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    async def asleep(self, seconds: float) -> None:
        self.sleep(seconds)


class Generator:
    """Operation that returns True after a number of failed attempts.

    A failed attempt returns False, or raises ``exception`` when one is
    given.

    Args:
        failures: The number of attempts that fail before the first
            success.
        exception: The exception class raised by failed attempts.
        clock: Optional fake clock advanced by ``duration`` on every
            attempt.
        duration: Virtual seconds spent in each attempt.
    """

    def __init__(
        self,
        failures: int,
        exception: type[Exception] | None = None,
        clock: FakeClock | None = None,
        duration: float = 0.0,
    ) -> None:
        self.failures = failures
        self.exception = exception
        self.clock = clock
        self.duration = duration
        self.call_count = 0

    def __call__(self) -> bool:
        self.call_count += 1
        if self.clock is not None:
            self.clock.advance(self.duration)
        if self.call_count > self.failures:
            return True
        if self.exception is not None:
            msg = f"attempt {self.call_count} failed"
            raise self.exception(msg)
        return False


class AsyncGenerator(Generator):
    """Coroutine version of ``Generator``."""

    async def __call__(self) -> bool:
        return super().__call__()
