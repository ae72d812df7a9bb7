# src/polltask/tasks/timer.py

from __future__ import annotations

from ..core.clock import resolve_clock
from ..core.poll import PENDING, PollResult, Ready
from ..core.ports import Clock
from ..core.task import Task


class TimerTask(Task[None]):
    """
    Becomes ready once `duration` seconds have elapsed since creation.

    This is the only real suspension point of the model: every combinator
    that waits does so through a child TimerTask. Once ready it stays ready.
    """

    def __init__(self, duration: float, *, clock: Clock | None = None) -> None:
        duration = float(duration)
        if duration < 0:
            raise ValueError(f"timer duration must be >= 0, got {duration}")
        self._clock = resolve_clock(clock)
        self._duration = duration
        self._started_at = self._clock.now()

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def elapsed(self) -> float:
        return self._clock.now() - self._started_at

    @property
    def remaining(self) -> float:
        return max(0.0, self._duration - self.elapsed)

    def poll(self) -> PollResult[None]:
        if self.elapsed < self._duration:
            return PENDING
        return Ready(None)

    def __repr__(self) -> str:
        return f"TimerTask(duration={self._duration!r})"


def sleep(duration: float, *, clock: Clock | None = None) -> TimerTask:
    return TimerTask(duration, clock=clock)
