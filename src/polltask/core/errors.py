# src/polltask/core/errors.py

from __future__ import annotations

"""
Exceptions used by the task model.

Operation failures are values (Err) and never appear here.
These types cover programming errors and the synthetic timeout failure.
"""

from typing import Any


class TaskError(Exception):
    """Base class for task model errors."""


class TaskTimeout(TaskError):
    """
    A deadline wrapper gave up on its inner task.

    Carried inside Err(...) by Timeout; it is not raised by the wrapper itself.
    """

    def __init__(self, elapsed: float, timeout: float) -> None:
        super().__init__(f"timed out after {elapsed:.3f}s (limit {timeout:.3f}s)")
        self.elapsed = elapsed
        self.timeout = timeout


class TaskAlreadyCompleted(TaskError):
    """A task was polled again after it reported Ready."""


class ReentrantDriveError(TaskError):
    """A driver was asked to drive a task that is already being driven."""


class UnwrapError(TaskError):
    def __init__(self, error: Any) -> None:
        super().__init__(f"called unwrap() on Err({error!r})")
        self.error = error
