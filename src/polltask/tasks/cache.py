# src/polltask/tasks/cache.py

from __future__ import annotations

from ..core.ports import Clock
from .chain import Delayed


class DelayedCache:
    """
    In-memory key/value cache with simulated access latency.

    Reads and writes take effect when their task completes.
    Dropping a pending set() task means the write never happens.
    """

    def __init__(
            self,
            *,
            read_delay: float = 0.01,
            write_delay: float = 0.015,
            clock: Clock | None = None,
    ) -> None:
        self._data: dict[str, str] = {}
        self.read_delay = float(read_delay)
        self.write_delay = float(write_delay)
        self._clock = clock

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str) -> Delayed[str | None]:
        return Delayed(self.read_delay, lambda: self._data.get(key), clock=self._clock)

    def set(self, key: str, value: str) -> Delayed[None]:
        def _write() -> None:
            self._data[key] = value

        return Delayed(self.write_delay, _write, clock=self._clock)
