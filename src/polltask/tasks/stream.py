# src/polltask/tasks/stream.py

from __future__ import annotations

"""
Asynchronous streams.

A Stream produces a sequence of items, one poll-driven step at a time.
poll_next() returns Pending, Ready(item), or Ready(None) once exhausted.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..core.clock import resolve_clock
from ..core.errors import TaskAlreadyCompleted
from ..core.poll import PENDING, PollResult, Ready
from ..core.ports import Clock
from ..core.task import Task
from .timer import TimerTask

T = TypeVar("T")


class Stream(ABC, Generic[T]):
    @abstractmethod
    def poll_next(self) -> PollResult[T | None]:
        ...

    def next(self) -> Task[T | None]:
        """A task that resolves to the next item (None when exhausted)."""
        return Next(self)


class Next(Task[T | None]):
    def __init__(self, stream: Stream[T]) -> None:
        self._stream: Stream[T] | None = stream

    def poll(self) -> PollResult[T | None]:
        if self._stream is None:
            raise TaskAlreadyCompleted("Next polled after Ready")
        res = self._stream.poll_next()
        if isinstance(res, Ready):
            self._stream = None
        return res


class CountingStream(Stream[int]):
    """Yields 0, 1, ..., maximum - 1, each after waiting `delay` seconds."""

    def __init__(self, maximum: int, *, delay: float = 0.1, clock: Clock | None = None) -> None:
        self.current = 0
        self.maximum = int(maximum)
        self.delay = float(delay)
        self._clock = resolve_clock(clock)
        self._wait: TimerTask | None = None

    def poll_next(self) -> PollResult[int | None]:
        if self.current >= self.maximum:
            return Ready(None)

        if self._wait is None:
            self._wait = TimerTask(self.delay, clock=self._clock)
        if not self._wait.poll().is_ready:
            return PENDING

        self._wait = None
        value = self.current
        self.current += 1
        return Ready(value)


class Collect(Task[list[T]]):
    """Drain a stream into a list."""

    def __init__(self, stream: Stream[T]) -> None:
        self._stream: Stream[T] | None = stream
        self._items: list[T] = []

    def poll(self) -> PollResult[list[T]]:
        if self._stream is None:
            raise TaskAlreadyCompleted("Collect polled after Ready")
        while True:
            res = self._stream.poll_next()
            if not isinstance(res, Ready):
                return PENDING
            if res.value is None:
                self._stream = None
                return Ready(self._items)
            self._items.append(res.value)


def collect(stream: Stream[T]) -> Collect[T]:
    return Collect(stream)
