# src/polltask/tasks/timeout.py

from __future__ import annotations

"""
Deadline wrapper.

The deadline is checked BEFORE the inner task is polled. A task that would
have completed in the same cycle the deadline passed is therefore reported
as timed out. Once timed out, the inner task is dropped and never polled again.
"""

import logging
from typing import TypeVar

from ..core.clock import resolve_clock
from ..core.errors import TaskAlreadyCompleted, TaskTimeout
from ..core.poll import PENDING, PollResult, Ready
from ..core.ports import Clock
from ..core.result import Err, Ok, Result
from ..core.task import Task

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Timeout(Task[Result[T, TaskTimeout]]):
    def __init__(self, task: Task[T], timeout: float, *, clock: Clock | None = None) -> None:
        timeout = float(timeout)
        if timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {timeout}")
        self._inner: Task[T] | None = task
        self._timeout = timeout
        self._clock = resolve_clock(clock)
        self._started_at = self._clock.now()
        self._timed_out = False
        self._done = False

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def timed_out(self) -> bool:
        return self._timed_out

    def poll(self) -> PollResult[Result[T, TaskTimeout]]:
        if self._done or self._inner is None:
            raise TaskAlreadyCompleted("Timeout polled after Ready")

        elapsed = self._clock.now() - self._started_at
        if elapsed > self._timeout:
            # Abandon the inner task; its partial progress is discarded.
            self._inner = None
            self._timed_out = True
            self._done = True
            logger.debug("Deadline of %.3fs exceeded (elapsed %.3fs)", self._timeout, elapsed)
            return Ready(Err(TaskTimeout(elapsed, self._timeout)))

        res = self._inner.poll()
        if not isinstance(res, Ready):
            return PENDING

        self._inner = None
        self._done = True
        return Ready(Ok(res.value))


def with_timeout(task: Task[T], timeout: float, *, clock: Clock | None = None) -> Timeout[T]:
    return Timeout(task, timeout, clock=clock)
