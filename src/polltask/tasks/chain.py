# src/polltask/tasks/chain.py

from __future__ import annotations

"""
Sequencing helpers.

- Delayed: wait, then compute a value
- Map: transform a task's output
- AndThen: continue with another task built from the output
- TryAndThen: same, but an Err output short-circuits
"""

from collections.abc import Callable
from typing import Any, TypeVar

from ..core.clock import resolve_clock
from ..core.errors import TaskAlreadyCompleted
from ..core.poll import PENDING, PollResult, Ready
from ..core.ports import Clock
from ..core.result import Err, Ok, Result
from ..core.task import Immediate, Task
from .timer import TimerTask

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class Delayed(Task[T]):
    """Wait `delay` seconds, then produce `compute()`."""

    def __init__(self, delay: float, compute: Callable[[], T], *, clock: Clock | None = None) -> None:
        self._timer: TimerTask | None = TimerTask(delay, clock=resolve_clock(clock))
        self._compute = compute

    def poll(self) -> PollResult[T]:
        if self._timer is None:
            raise TaskAlreadyCompleted("Delayed polled after Ready")
        if not self._timer.poll().is_ready:
            return PENDING
        self._timer = None
        return Ready(self._compute())


def delayed(delay: float, compute: Callable[[], T], *, clock: Clock | None = None) -> Delayed[T]:
    return Delayed(delay, compute, clock=clock)


class Map(Task[U]):
    def __init__(self, task: Task[T], fn: Callable[[T], U]) -> None:
        self._inner: Task[T] | None = task
        self._fn = fn

    def poll(self) -> PollResult[U]:
        if self._inner is None:
            raise TaskAlreadyCompleted("Map polled after Ready")
        res = self._inner.poll()
        if not isinstance(res, Ready):
            return PENDING
        self._inner = None
        return Ready(self._fn(res.value))


class AndThen(Task[U]):
    """Run `task`, then the task `fn(output)`; yields the second output."""

    def __init__(self, task: Task[T], fn: Callable[[T], Task[U]]) -> None:
        self._first: Task[T] | None = task
        self._second: Task[U] | None = None
        self._fn = fn

    def poll(self) -> PollResult[U]:
        second = self._second
        if second is None:
            first = self._first
            if first is None:
                raise TaskAlreadyCompleted("AndThen polled after Ready")
            res = first.poll()
            if not isinstance(res, Ready):
                return PENDING
            self._first = None
            second = self._second = self._fn(res.value)

        res2 = second.poll()
        if not isinstance(res2, Ready):
            return PENDING
        self._second = None
        return Ready(res2.value)


class TryAndThen(Task[Result[U, E]]):
    """
    Result-aware AndThen.

    Ok(v)  -> continue with fn(v), which must itself produce a Result
    Err(e) -> Ready(Err(e)) immediately; fn is never called
    """

    def __init__(self, task: Task[Result[T, E]], fn: Callable[[T], Task[Result[U, E]]]) -> None:
        self._chain = AndThen(task, self._continue)
        self._fn = fn

    def _continue(self, outcome: Any) -> Task[Result[U, E]]:
        if isinstance(outcome, Ok):
            return self._fn(outcome.value)
        if isinstance(outcome, Err):
            return Immediate(outcome)
        raise TypeError(f"expected Ok/Err output, got {type(outcome).__name__}")

    def poll(self) -> PollResult[Result[U, E]]:
        return self._chain.poll()
