# tests/test_pipeline.py

from __future__ import annotations

import pytest

from polltask.core.errors import TaskAlreadyCompleted
from polltask.core.poll import PENDING, Ready
from polltask.tasks.executor import Executor
from polltask.tasks.pipeline import StreamProcess, WorkQueue, stream_process

from .fakes import FakeClock, ScriptedTask


def test_next_item_task_created_only_after_previous_ready(executor: Executor) -> None:
    log: list = []

    def processor(item: str) -> ScriptedTask:
        log.append(("created", item))
        return ScriptedTask(item.upper(), pending_polls=2, name=item, log=log)

    results = executor.run(stream_process(["a", "b", "c"], processor))

    assert results == ["A", "B", "C"]
    assert log == [
        ("created", "a"),
        ("ready", "a"),
        ("created", "b"),
        ("ready", "b"),
        ("created", "c"),
        ("ready", "c"),
    ]


def test_only_one_item_in_flight_per_poll() -> None:
    created: list[int] = []

    def processor(item: int) -> ScriptedTask:
        created.append(item)
        return ScriptedTask(item * 10, pending_polls=1)

    task = StreamProcess([1, 2, 3], processor)

    assert task.poll() is PENDING
    assert created == [1]
    assert task.poll() is PENDING  # 1 ready, 2 created and pending
    assert created == [1, 2]
    assert task.processed == 1


def test_empty_input_is_ready_immediately() -> None:
    task = stream_process([], lambda item: ScriptedTask(item))
    assert task.poll() == Ready([])
    with pytest.raises(TaskAlreadyCompleted):
        task.poll()


def test_items_consumed_lazily(executor: Executor) -> None:
    pulled: list[int] = []

    def items():
        for i in range(3):
            pulled.append(i)
            yield i

    task = stream_process(items(), lambda item: ScriptedTask(item + 1, pending_polls=1))
    assert task.poll() is PENDING
    assert pulled == [0]

    assert executor.run(task) == [1, 2, 3]


def test_work_queue_runs_jobs_in_order_and_drains(clock: FakeClock, executor: Executor) -> None:
    order: list[str] = []
    queue = WorkQueue()
    queue.add_task(lambda: order.append("first") or "first done")
    queue.add_task(lambda: order.append("second") or "second done")
    assert len(queue) == 2

    task = queue.process_all(delay=0.05, clock=clock)
    assert len(queue) == 0

    assert executor.run(task) == ["first done", "second done"]
    assert order == ["first", "second"]
    assert clock.now() >= 0.1 - 1e-9


def test_work_queue_rejects_non_callables() -> None:
    with pytest.raises(TypeError):
        WorkQueue().add_task("nope")  # type: ignore[arg-type]
