# src/polltask/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- picks the clock,
- wires the executor into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.clock import default_clock
from ..core.ports import Clock
from ..core.state import AppState
from ..tasks.executor import Executor

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the clock) injectable makes the CLI easy to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if clock is None:
        clock = default_clock()

    poll_interval = float(getattr(settings, "poll_interval_seconds", 0.001))
    executor = Executor(clock=clock, poll_interval=poll_interval)
    logger.debug("Executor ready (poll_interval=%.4fs)", poll_interval)

    return AppState(settings=settings, clock=clock, executor=executor)
