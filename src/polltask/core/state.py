# src/polltask/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.executor import Executor
from .ports import Clock


@dataclass
class AppState:
    # Store Settings on the state for easy access in command handlers.
    settings: object

    clock: Clock
    executor: Executor
