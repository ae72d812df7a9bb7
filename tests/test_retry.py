# tests/test_retry.py

from __future__ import annotations

import pytest

from polltask.core.errors import TaskAlreadyCompleted
from polltask.core.poll import PENDING, Ready
from polltask.core.result import Err, Ok
from polltask.core.task import Immediate
from polltask.tasks.executor import Executor
from polltask.tasks.retry import Retry, retry

from .fakes import FakeClock, ScriptedTask


class Operation:
    """Retryable operation factory: fails the first `failures` attempts."""

    def __init__(self, clock: FakeClock, failures: int, *, pending_polls: int = 0) -> None:
        self.clock = clock
        self.failures = failures
        self.pending_polls = pending_polls
        self.created_at: list[float] = []

    @property
    def calls(self) -> int:
        return len(self.created_at)

    def __call__(self):
        self.created_at.append(self.clock.now())
        n = self.calls
        outcome = Err(f"error {n}") if n <= self.failures else Ok(f"value {n}")
        return ScriptedTask(outcome, pending_polls=self.pending_polls)


def test_always_failing_operation_runs_exactly_k_times(clock: FakeClock, executor: Executor) -> None:
    op = Operation(clock, failures=99)
    task = retry(op, max_attempts=4, base_delay=0.01, clock=clock)

    outcome = executor.run(task)

    assert op.calls == 4
    assert task.attempts == 4
    # Only the last error is surfaced.
    assert outcome == Err("error 4")


def test_success_on_attempt_j_stops_retrying(clock: FakeClock, executor: Executor) -> None:
    op = Operation(clock, failures=2)
    task = Retry(op, max_attempts=5, base_delay=0.01, clock=clock)

    outcome = executor.run(task)

    assert outcome == Ok("value 3")
    assert op.calls == 3
    assert len(task.backoff_delays) == 2


def test_backoff_doubles_between_attempts(clock: FakeClock) -> None:
    # Power-of-two values keep the fake clock arithmetic exact.
    executor = Executor(clock=clock, poll_interval=0.25)
    op = Operation(clock, failures=99)
    task = Retry(op, max_attempts=4, base_delay=1.0, clock=clock)

    executor.run(task)

    assert op.created_at == [0.0, 1.0, 3.0, 7.0]
    gaps = [b - a for a, b in zip(op.created_at, op.created_at[1:])]
    assert gaps == [1.0, 2.0, 4.0]
    assert task.backoff_delays == [1.0, 2.0, 4.0]


def test_backoff_formula_and_cap() -> None:
    task = Retry(lambda: Immediate(Ok(1)), base_delay=0.1, max_delay=0.3)
    assert task.backoff_delay(1) == pytest.approx(0.1)
    assert task.backoff_delay(2) == pytest.approx(0.2)
    assert task.backoff_delay(3) == pytest.approx(0.3)
    assert task.backoff_delay(4) == pytest.approx(0.3)


def test_next_attempt_not_started_before_backoff_elapses(clock: FakeClock) -> None:
    op = Operation(clock, failures=1)
    task = Retry(op, max_attempts=2, base_delay=1.0, clock=clock)

    assert task.poll() is PENDING
    assert op.calls == 1

    clock.advance(0.5)
    assert task.poll() is PENDING
    assert op.calls == 1

    clock.advance(0.5)
    assert task.poll() == Ready(Ok("value 2"))
    assert op.calls == 2


def test_at_most_one_attempt_in_flight(clock: FakeClock) -> None:
    op = Operation(clock, failures=1, pending_polls=2)
    task = Retry(op, max_attempts=3, base_delay=0.0, clock=clock)

    assert task.poll() is PENDING
    assert task.poll() is PENDING
    assert op.calls == 1
    # Third poll: attempt 1 fails, zero backoff, attempt 2 starts and is pending.
    assert task.poll() is PENDING
    assert op.calls == 2


def test_on_retry_hook_receives_attempt_error_and_delay(clock: FakeClock, executor: Executor) -> None:
    seen: list[tuple[int, str, float]] = []
    op = Operation(clock, failures=2)
    task = Retry(
        op,
        max_attempts=3,
        base_delay=0.5,
        clock=clock,
        on_retry=lambda attempt, error, delay: seen.append((attempt, error, delay)),
    )

    executor.run(task)

    assert seen == [(1, "error 1", 0.5), (2, "error 2", 1.0)]


def test_raising_on_retry_hook_keeps_backoff_wait(clock: FakeClock) -> None:
    calls = {"n": 0}

    def flaky_hook(attempt: int, error: str, delay: float) -> None:
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("hook failed")

    op = Operation(clock, failures=99)
    task = Retry(op, max_attempts=3, base_delay=5.0, clock=clock, on_retry=flaky_hook)

    with pytest.raises(RuntimeError):
        task.poll()

    assert task.poll() is PENDING
    assert op.created_at == [0.0]

    clock.advance(5.0)
    assert task.poll() is PENDING
    assert op.created_at == [0.0, 5.0]
    assert calls["n"] == 2


def test_single_attempt_never_waits(clock: FakeClock) -> None:
    op = Operation(clock, failures=1)
    task = Retry(op, max_attempts=1, base_delay=10.0, clock=clock)
    assert task.poll() == Ready(Err("error 1"))
    assert task.backoff_delays == []


def test_invalid_arguments_rejected() -> None:
    with pytest.raises(ValueError):
        Retry(lambda: Immediate(Ok(1)), max_attempts=0)
    with pytest.raises(ValueError):
        Retry(lambda: Immediate(Ok(1)), base_delay=-1)


def test_non_result_output_is_a_type_error(clock: FakeClock) -> None:
    task = Retry(lambda: Immediate("not a result"), clock=clock)
    with pytest.raises(TypeError):
        task.poll()


def test_poll_after_ready_raises(clock: FakeClock) -> None:
    task = Retry(lambda: Immediate(Ok(1)), clock=clock)
    assert task.poll() == Ready(Ok(1))
    with pytest.raises(TaskAlreadyCompleted):
        task.poll()
