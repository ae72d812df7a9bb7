# src/polltask/tasks/retry.py

from __future__ import annotations

"""
Retry with exponential backoff.

One attempt at a time:
- attempt n is a fresh task from `operation()`, polled once per external poll
- Ok(v)  -> Ready(Ok(v)), no more attempts
- Err(e) -> Ready(Err(e)) if n == max_attempts (only the last error is kept),
            otherwise wait base_delay * 2 ** (n - 1) and start attempt n + 1

The wait is a child TimerTask, so backoff participates in the same polling
model as everything else.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from ..core.clock import resolve_clock
from ..core.errors import TaskAlreadyCompleted
from ..core.poll import PENDING, PollResult, Ready
from ..core.ports import Clock, RetryHook
from ..core.result import Err, Ok, Result
from ..core.task import Task
from .timer import TimerTask

V = TypeVar("V")
E = TypeVar("E")

logger = logging.getLogger(__name__)


class Retry(Task[Result[V, E]]):
    def __init__(
            self,
            operation: Callable[[], Task[Result[V, E]]],
            *,
            max_attempts: int = 3,
            base_delay: float = 0.1,
            max_delay: float | None = None,
            clock: Clock | None = None,
            on_retry: RetryHook | None = None,
    ) -> None:
        if int(max_attempts) < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        if float(base_delay) < 0:
            raise ValueError(f"base_delay must be >= 0, got {base_delay}")

        self._operation = operation
        self.max_attempts = int(max_attempts)
        self.base_delay = float(base_delay)
        self.max_delay = None if max_delay is None else max(0.0, float(max_delay))
        self._clock = resolve_clock(clock)
        self._on_retry = on_retry

        self._attempts = 0
        self._current: Task[Result[V, E]] | None = None
        self._backoff: TimerTask | None = None
        self._done = False

        self.backoff_delays: list[float] = []

    @property
    def attempts(self) -> int:
        return self._attempts

    def backoff_delay(self, attempt: int) -> float:
        """Delay before attempt `attempt + 1` (attempts counted from 1)."""
        delay = self.base_delay * (2 ** (attempt - 1))
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay

    def poll(self) -> PollResult[Result[V, E]]:
        if self._done:
            raise TaskAlreadyCompleted("Retry polled after Ready")

        while True:
            if self._backoff is not None:
                if not self._backoff.poll().is_ready:
                    return PENDING
                self._backoff = None

            if self._current is None:
                self._attempts += 1
                self._current = self._operation()

            res = self._current.poll()
            if not isinstance(res, Ready):
                return PENDING

            self._current = None
            outcome: Any = res.value

            if isinstance(outcome, Ok):
                self._done = True
                return Ready(outcome)

            if not isinstance(outcome, Err):
                raise TypeError(
                    f"retry operation must produce Ok/Err, got {type(outcome).__name__}"
                )

            if self._attempts >= self.max_attempts:
                logger.warning(
                    "Giving up after %d attempts; last error: %r", self._attempts, outcome.error
                )
                self._done = True
                return Ready(outcome)

            delay = self.backoff_delay(self._attempts)
            self.backoff_delays.append(delay)
            logger.debug(
                "Attempt %d/%d failed (%r); retrying in %.3fs",
                self._attempts,
                self.max_attempts,
                outcome.error,
                delay,
            )
            self._backoff = TimerTask(delay, clock=self._clock)
            if self._on_retry is not None:
                self._on_retry(self._attempts, outcome.error, delay)


def retry(
        operation: Callable[[], Task[Result[V, E]]],
        *,
        max_attempts: int = 3,
        base_delay: float = 0.1,
        max_delay: float | None = None,
        clock: Clock | None = None,
        on_retry: RetryHook | None = None,
) -> Retry[V, E]:
    return Retry(
        operation,
        max_attempts=max_attempts,
        base_delay=base_delay,
        max_delay=max_delay,
        clock=clock,
        on_retry=on_retry,
    )
