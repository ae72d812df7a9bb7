# tests/test_join.py

from __future__ import annotations

import pytest

from polltask.core.errors import TaskAlreadyCompleted
from polltask.core.poll import PENDING, Ready
from polltask.core.result import Err, Ok
from polltask.tasks.executor import Executor
from polltask.tasks.join import Join, join, join_all

from .fakes import ScriptedTask


def test_output_order_matches_input_order_not_completion_order(executor: Executor) -> None:
    log: list = []
    slow = ScriptedTask("a", pending_polls=5, name="a", log=log)
    medium = ScriptedTask("b", pending_polls=2, name="b", log=log)
    fast = ScriptedTask("c", pending_polls=0, name="c", log=log)

    outputs = executor.run(join(slow, medium, fast))

    assert [name for _, name in log] == ["c", "b", "a"]
    assert outputs == ["a", "b", "c"]


def test_empty_join_is_immediately_ready() -> None:
    task = join_all([])
    assert task.poll() == Ready([])


def test_each_pending_child_polled_once_per_poll() -> None:
    children = [ScriptedTask(i, pending_polls=p) for i, p in enumerate([0, 1, 3])]
    task = Join(children)

    assert task.poll() is PENDING
    assert [c.polls for c in children] == [1, 1, 1]
    assert task.pending_count == 2

    assert task.poll() is PENDING
    # Completed child is not polled again (ScriptedTask would raise).
    assert [c.polls for c in children] == [1, 2, 2]

    assert task.poll() is PENDING
    assert task.poll() == Ready([0, 1, 2])
    assert [c.polls for c in children] == [1, 2, 4]


def test_errors_are_forwarded_without_short_circuit(executor: Executor) -> None:
    failing = ScriptedTask(Err("boom"), pending_polls=0)
    slow_ok = ScriptedTask(Ok(2), pending_polls=4)

    outputs = executor.run(join(failing, slow_ok))

    assert outputs == [Err("boom"), Ok(2)]
    assert slow_ok.polls == 5


def test_join_poll_after_ready_raises() -> None:
    task = join(ScriptedTask(1))
    assert task.poll() == Ready([1])
    with pytest.raises(TaskAlreadyCompleted):
        task.poll()
