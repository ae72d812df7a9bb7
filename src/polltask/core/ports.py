# src/polltask/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task model.

Tasks depend on Protocols instead of concrete implementations.
This keeps the time source swappable and makes testing easier
(a fake clock can advance time without sleeping).
"""

from typing import Any, Callable, Protocol


class Clock(Protocol):
    """Monotonic time source plus a sleep hint used between polls."""

    def now(self) -> float: ...

    def sleep(self, seconds: float) -> None: ...


# Called by Retry before each backoff wait: (attempt, error, delay_seconds).
RetryHook = Callable[[int, Any, float], None]
