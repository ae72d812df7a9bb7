# src/polltask/tasks/executor.py

from __future__ import annotations

"""
Driver.

The only place where blocking happens: poll a task in a loop, sleeping
`poll_interval` between Pending results, until it reports Ready.

Nested drivers over the same task are rejected; driving different tasks from
inside a task is allowed (top-level reentrancy only).
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import TypeVar

from ..core.clock import resolve_clock
from ..core.errors import ReentrantDriveError
from ..core.poll import Ready
from ..core.ports import Clock
from ..core.task import Task

T = TypeVar("T")

logger = logging.getLogger(__name__)

# ids of tasks currently being driven (single-threaded model, no locking)
_DRIVING: set[int] = set()


@dataclass(slots=True, frozen=True)
class DriveStats:
    polls: int
    elapsed: float


def _enter(task: Task) -> None:
    key = id(task)
    if key in _DRIVING:
        raise ReentrantDriveError(f"{task!r} is already being driven")
    _DRIVING.add(key)


def _leave(task: Task) -> None:
    _DRIVING.discard(id(task))


class Executor:
    def __init__(self, *, clock: Clock | None = None, poll_interval: float = 0.001) -> None:
        self.clock = resolve_clock(clock)
        self.poll_interval = max(0.0, float(poll_interval))
        self.last_stats: DriveStats | None = None

    def run(self, task: Task[T]) -> T:
        """Block until `task` is ready and return its value."""
        _enter(task)
        try:
            started = self.clock.now()
            polls = 0
            while True:
                polls += 1
                res = task.poll()
                if isinstance(res, Ready):
                    elapsed = self.clock.now() - started
                    self.last_stats = DriveStats(polls=polls, elapsed=elapsed)
                    logger.debug("Task %r ready after %d polls in %.3fs", task, polls, elapsed)
                    return res.value
                self.clock.sleep(self.poll_interval)
        finally:
            _leave(task)


def run(task: Task[T], *, clock: Clock | None = None, poll_interval: float = 0.001) -> T:
    return Executor(clock=clock, poll_interval=poll_interval).run(task)


async def run_async(task: Task[T], *, poll_interval: float = 0.001) -> T:
    """
    Drive a task from inside a running asyncio loop.

    Yields to the loop between polls instead of blocking the thread.
    To stop early, cancel the awaiting coroutine (the task is dropped).
    """
    sleep_s = max(0.0, float(poll_interval))
    _enter(task)
    try:
        while True:
            res = task.poll()
            if isinstance(res, Ready):
                return res.value
            await asyncio.sleep(sleep_s)
    finally:
        _leave(task)
