# src/polltask/tasks/join.py

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from ..core.errors import TaskAlreadyCompleted
from ..core.poll import PENDING, PollResult, Ready
from ..core.task import Task

T = TypeVar("T")

_UNSET: Any = object()


class Join(Task[list[T]]):
    """
    Wait for every child task.

    Each poll drives every unfinished child exactly once, so no child is
    starved by another one staying Pending. Completed children are dropped
    and their output kept in the child's original slot. Outputs (including
    Err values) are returned in input order; nothing short-circuits.
    """

    def __init__(self, tasks: Iterable[Task[T]]) -> None:
        self._children: list[Task[T] | None] = list(tasks)
        self._results: list[Any] = [_UNSET] * len(self._children)
        self._done = False

    @property
    def pending_count(self) -> int:
        return sum(1 for c in self._children if c is not None)

    def poll(self) -> PollResult[list[T]]:
        if self._done:
            raise TaskAlreadyCompleted("Join polled after Ready")

        for i, child in enumerate(self._children):
            if child is None:
                continue
            res = child.poll()
            if isinstance(res, Ready):
                self._results[i] = res.value
                self._children[i] = None

        if self.pending_count:
            return PENDING

        self._done = True
        return Ready(list(self._results))


def join(*tasks: Task[T]) -> Join[T]:
    return Join(tasks)


def join_all(tasks: Iterable[Task[T]]) -> Join[T]:
    return Join(tasks)
