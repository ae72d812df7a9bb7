# src/polltask/core/clock.py

from __future__ import annotations

import time

from .ports import Clock


class MonotonicClock:
    """Wall-clock implementation of the Clock port."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(max(0.0, seconds))


_DEFAULT_CLOCK = MonotonicClock()


def default_clock() -> Clock:
    return _DEFAULT_CLOCK


def resolve_clock(clock: Clock | None) -> Clock:
    return _DEFAULT_CLOCK if clock is None else clock
