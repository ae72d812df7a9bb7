# src/polltask/core/task.py

from __future__ import annotations

"""
Task contract.

A Task is a unit of deferred computation. Each call to poll() drives it once
and returns Pending or Ready(value). After Ready, the caller must stop.

Ownership: tasks are moved into combinators/drivers, never shared.
Cancellation: the owner drops its reference; nothing else is signalled.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .errors import TaskAlreadyCompleted
from .poll import PollResult, Ready

T = TypeVar("T")


class Task(ABC, Generic[T]):
    @abstractmethod
    def poll(self) -> PollResult[T]:
        """Drive the task once."""
        ...


class Immediate(Task[T]):
    """A task that is ready on its first poll."""

    def __init__(self, value: T) -> None:
        self._value = value
        self._done = False

    def poll(self) -> PollResult[T]:
        if self._done:
            raise TaskAlreadyCompleted("Immediate task polled after Ready")
        self._done = True
        return Ready(self._value)


def ready(value: T) -> Immediate[T]:
    return Immediate(value)
