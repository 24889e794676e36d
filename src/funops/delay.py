from __future__ import annotations

import functools
import sys
import time
import types
from typing import Any, Callable, TextIO

from loguru import logger

from .common.config_service import validate_positive_int, validate_seconds
from .common.invocable import as_invocable, describe

Clock = Callable[[], float]
Sleeper = Callable[[float], None]


class MethodWrapper:
    """Bind like a function when used to decorate a method."""

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self, instance)


class FixedDelay(MethodWrapper):
    """Sleep a fixed amount before every call to the wrapped callable."""

    def __init__(
        self,
        func: Callable[..., Any],
        amount: float,
        sleeper: Sleeper | None = None,
    ) -> None:
        self._func = func
        self._amount = amount
        self._sleep = sleeper or time.sleep
        functools.update_wrapper(self, func, updated=())

    @property
    def amount(self) -> float:
        return self._amount

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if self._amount > 0:
            logger.debug(f"Sleeping for {self._amount} seconds.")
            self._sleep(self._amount)
        return self._func(*args, **kwargs)


class MinimumInterval(MethodWrapper):
    """Keep at least ``interval`` seconds between the end of one call and the
    start of the next.

    The completion time is recorded on every exit path, so a failing call
    throttles the next one exactly like a successful call does. Instances are
    not safe to share between threads.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        interval: float,
        clock: Clock | None = None,
        sleeper: Sleeper | None = None,
    ) -> None:
        self._func = func
        self._interval = interval
        self._clock = clock or time.monotonic
        self._sleep = sleeper or time.sleep
        self._last_completed: float | None = None
        functools.update_wrapper(self, func, updated=())

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def last_completed(self) -> float | None:
        return self._last_completed

    def wait_time(self) -> float:
        if self._last_completed is None:
            return 0.0
        elapsed = self._clock() - self._last_completed
        return max(self._interval - elapsed, 0.0)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        wait = self.wait_time()
        if wait > 0:
            logger.debug(f"Sleeping for {wait} seconds.")
            self._sleep(wait)
        try:
            return self._func(*args, **kwargs)
        finally:
            self._last_completed = self._clock()


class DotEvery(MethodWrapper):
    """Write a dot to ``stream`` on every ``n``th call."""

    def __init__(
        self, func: Callable[..., Any], n: int, stream: TextIO | None = None
    ) -> None:
        self._func = func
        self._n = n
        self._stream = stream
        self._calls = 0
        functools.update_wrapper(self, func, updated=())

    @property
    def calls(self) -> int:
        return self._calls

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self._calls += 1
        if self._calls % self._n == 0:
            # resolve late so redirected stderr is honoured
            stream = self._stream if self._stream is not None else sys.stderr
            stream.write(".")
            stream.flush()
        return self._func(*args, **kwargs)


def delay_by(func: Any, amount: float, *, sleeper: Sleeper | None = None) -> FixedDelay:
    amount = validate_seconds(amount, "amount")
    func = as_invocable(func)
    logger.debug(f"Delaying {describe(func)} by {amount} seconds per call")
    return FixedDelay(func, amount, sleeper=sleeper)


def delay_at_least(
    func: Any,
    interval: float,
    *,
    clock: Clock | None = None,
    sleeper: Sleeper | None = None,
) -> MinimumInterval:
    interval = validate_seconds(interval, "interval")
    func = as_invocable(func)
    logger.debug(
        f"Spacing calls to {describe(func)} at least {interval} seconds apart"
    )
    return MinimumInterval(func, interval, clock=clock, sleeper=sleeper)


def dot_every(func: Any, n: int, *, stream: TextIO | None = None) -> DotEvery:
    n = validate_positive_int(n, "n")
    return DotEvery(as_invocable(func), n, stream=stream)
