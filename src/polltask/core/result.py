# src/polltask/core/result.py

from __future__ import annotations

"""
Fallible task outputs.

A task whose computation can fail produces Ok(value) or Err(error) as its
output. Combinators decide what an Err means (retry retries, join forwards).
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import UnwrapError

V = TypeVar("V")
E = TypeVar("E")


@dataclass(slots=True, frozen=True)
class Ok(Generic[V]):
    value: V

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> V:
        return self.value

    def unwrap_or(self, default: V) -> V:
        return self.value


@dataclass(slots=True, frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self):
        if isinstance(self.error, BaseException):
            raise UnwrapError(self.error) from self.error
        raise UnwrapError(self.error)

    def unwrap_or(self, default):
        return default


Result = Union[Ok[V], Err[E]]
