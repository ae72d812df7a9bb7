# src/polltask/tasks/pipeline.py

from __future__ import annotations

"""
Sequential processing.

StreamProcess models a single consumer: the task for item i + 1 is created
only after the task for item i reported Ready. This is not a fan-out; use
Join for that.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import TypeVar

from ..core.errors import TaskAlreadyCompleted
from ..core.poll import PENDING, PollResult, Ready
from ..core.ports import Clock
from ..core.task import Task
from .chain import Delayed

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class StreamProcess(Task[list[R]]):
    def __init__(self, items: Iterable[T], processor: Callable[[T], Task[R]]) -> None:
        self._items: Iterator[T] = iter(items)
        self._processor = processor
        self._current: Task[R] | None = None
        self._results: list[R] = []
        self._done = False

    @property
    def processed(self) -> int:
        return len(self._results)

    def poll(self) -> PollResult[list[R]]:
        if self._done:
            raise TaskAlreadyCompleted("StreamProcess polled after Ready")

        while True:
            if self._current is None:
                try:
                    item = next(self._items)
                except StopIteration:
                    self._done = True
                    return Ready(self._results)
                self._current = self._processor(item)

            res = self._current.poll()
            if not isinstance(res, Ready):
                return PENDING
            self._current = None
            self._results.append(res.value)


def stream_process(items: Iterable[T], processor: Callable[[T], Task[R]]) -> StreamProcess[R]:
    return StreamProcess(items, processor)


class WorkQueue:
    """
    Queue of zero-argument jobs processed one after another.

    process_all() drains the queue: jobs added afterwards belong to the next batch.
    """

    def __init__(self) -> None:
        self._jobs: list[Callable[[], object]] = []

    def __len__(self) -> int:
        return len(self._jobs)

    def add_task(self, job: Callable[[], T]) -> None:
        if not callable(job):
            raise TypeError(f"job must be callable, got {type(job).__name__}")
        self._jobs.append(job)

    def process_all(self, *, delay: float = 0.05, clock: Clock | None = None) -> StreamProcess:
        jobs, self._jobs = self._jobs, []
        logger.debug("Processing %d queued jobs", len(jobs))
        return StreamProcess(jobs, lambda job: Delayed(delay, job, clock=clock))
