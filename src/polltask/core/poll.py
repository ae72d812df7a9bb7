# src/polltask/core/poll.py

from __future__ import annotations

"""
Poll outcomes.

Driving a task once produces exactly one of:
- Pending: no output yet, poll again later
- Ready(value): the task is finished; do not poll it again
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Pending:
    @property
    def is_ready(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Pending"


PENDING = Pending()


@dataclass(slots=True, frozen=True)
class Ready(Generic[T]):
    value: T

    @property
    def is_ready(self) -> bool:
        return True


PollResult = Union[Pending, Ready[T]]
