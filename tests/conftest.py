# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from polltask.cli.bootstrap import create_initial_state
from polltask.core.state import AppState
from polltask.tasks.executor import Executor

from .fakes import FakeClock


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def executor(clock: FakeClock) -> Executor:
    """Executor whose sleeps advance the fake clock (runs instantly)."""
    return Executor(clock=clock, poll_interval=0.001)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and command handlers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="polltask-test",
        log_level="INFO",
        log_dir=tmp_path / "logs",
        log_to_file=False,
        poll_interval_seconds=0.001,
        retry_max_attempts=3,
        retry_base_delay_seconds=0.1,
        timeout_seconds=1.0,
        state_threshold=3,
        state_start_delay_seconds=0.1,
        state_step_delay_seconds=0.05,
        item_delay_seconds=0.01,
        stream_delay_seconds=0.1,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock) -> AppState:
    """AppState wired with the fake clock so demos run without sleeping."""
    return create_initial_state(settings=settings, clock=clock)
