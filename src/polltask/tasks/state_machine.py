# src/polltask/tasks/state_machine.py

from __future__ import annotations

"""
Explicit state task.

The task's representation is a tagged variant and poll() is a transition
function over it:

    Start --(start_delay)--> Processing(0)
    Processing(n) --> Processing(n + 1), wait step_delay
        n + 1 >= threshold -> Finished(result)
    Finished -> terminal; further polls return the same Ready

`history` keeps a snapshot of every state the task suspended in or finished
with, e.g. Start, Processing(1), Processing(2), Processing(3), Finished(...).
"""

import logging
from dataclasses import dataclass, replace
from typing import Union

from ..core.clock import resolve_clock
from ..core.poll import PENDING, PollResult, Ready
from ..core.ports import Clock
from ..core.task import Task
from .timer import TimerTask

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Start:
    pass


@dataclass(slots=True)
class Processing:
    count: int


@dataclass(slots=True, frozen=True)
class Finished:
    result: str


MachineState = Union[Start, Processing, Finished]


class StateMachineTask(Task[str]):
    def __init__(
            self,
            *,
            threshold: int = 3,
            start_delay: float = 0.1,
            step_delay: float = 0.05,
            clock: Clock | None = None,
    ) -> None:
        if int(threshold) < 1:
            raise ValueError(f"threshold must be >= 1, got {threshold}")
        self.threshold = int(threshold)
        self.start_delay = float(start_delay)
        self.step_delay = float(step_delay)
        self._clock = resolve_clock(clock)

        self._state: MachineState = Start()
        self._wait: TimerTask | None = None
        self.history: list[MachineState] = []

    @property
    def state(self) -> MachineState:
        return self._snapshot()

    @property
    def finished(self) -> bool:
        return isinstance(self._state, Finished)

    def _snapshot(self) -> MachineState:
        # Processing is mutated in place; hand out copies.
        return replace(self._state) if isinstance(self._state, Processing) else self._state

    def _suspend(self, delay: float) -> TimerTask:
        self._wait = TimerTask(delay, clock=self._clock)
        snapshot = self._snapshot()
        self.history.append(snapshot)
        logger.debug("State machine waiting in %r", snapshot)
        return self._wait

    def poll(self) -> PollResult[str]:
        while True:
            state = self._state

            if isinstance(state, Finished):
                return Ready(state.result)

            wait = self._wait
            if wait is None:
                if isinstance(state, Processing):
                    state.count += 1
                    wait = self._suspend(self.step_delay)
                else:
                    wait = self._suspend(self.start_delay)

            if not wait.poll().is_ready:
                return PENDING
            self._wait = None

            if isinstance(state, Start):
                self._state = Processing(0)
            elif state.count >= self.threshold:
                self._state = Finished(f"completed after {state.count} steps")
                self.history.append(self._state)
                logger.debug("State machine finished: %s", self._state.result)
