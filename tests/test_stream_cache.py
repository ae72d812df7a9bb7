# tests/test_stream_cache.py

from __future__ import annotations

from polltask.core.poll import PENDING, Ready
from polltask.tasks.cache import DelayedCache
from polltask.tasks.executor import Executor
from polltask.tasks.stream import CountingStream, collect

from .fakes import FakeClock


def test_counting_stream_yields_items_after_delay(clock: FakeClock) -> None:
    stream = CountingStream(2, delay=1.0, clock=clock)

    assert stream.poll_next() is PENDING
    clock.advance(1.0)
    assert stream.poll_next() == Ready(0)

    assert stream.poll_next() is PENDING
    clock.advance(1.0)
    assert stream.poll_next() == Ready(1)

    assert stream.poll_next() == Ready(None)
    assert stream.poll_next() == Ready(None)


def test_next_task_resolves_one_item(clock: FakeClock, executor: Executor) -> None:
    stream = CountingStream(3, delay=0.1, clock=clock)
    assert executor.run(stream.next()) == 0
    assert executor.run(stream.next()) == 1
    assert stream.current == 2


def test_collect_drains_stream(clock: FakeClock, executor: Executor) -> None:
    assert executor.run(collect(CountingStream(5, delay=0.1, clock=clock))) == [0, 1, 2, 3, 4]
    assert executor.run(collect(CountingStream(0, clock=clock))) == []


def test_cache_set_then_get(clock: FakeClock, executor: Executor) -> None:
    cache = DelayedCache(clock=clock)

    assert executor.run(cache.get("k")) is None
    executor.run(cache.set("k", "v"))
    assert executor.run(cache.get("k")) == "v"
    assert len(cache) == 1


def test_dropped_write_never_happens(clock: FakeClock, executor: Executor) -> None:
    cache = DelayedCache(write_delay=1.0, clock=clock)

    pending_write = cache.set("k", "v")
    assert pending_write.poll() is PENDING
    del pending_write

    clock.advance(5.0)
    assert executor.run(cache.get("k")) is None
    assert len(cache) == 0
