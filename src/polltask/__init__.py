# src/polltask/__init__.py

"""
polltask: a small cooperative task model.

Tasks are driven by repeated poll() calls; a single driver interleaves them.
No threads, no event loop required.
"""

from __future__ import annotations

from .core.clock import MonotonicClock, default_clock
from .core.errors import (
    ReentrantDriveError,
    TaskAlreadyCompleted,
    TaskError,
    TaskTimeout,
    UnwrapError,
)
from .core.poll import PENDING, Pending, PollResult, Ready
from .core.result import Err, Ok, Result
from .core.task import Immediate, Task, ready
from .tasks.cache import DelayedCache
from .tasks.chain import AndThen, Delayed, Map, TryAndThen, delayed
from .tasks.executor import DriveStats, Executor, run, run_async
from .tasks.join import Join, join, join_all
from .tasks.pipeline import StreamProcess, WorkQueue, stream_process
from .tasks.retry import Retry, retry
from .tasks.state_machine import Finished, Processing, Start, StateMachineTask
from .tasks.stream import Collect, CountingStream, Stream, collect
from .tasks.timeout import Timeout, with_timeout
from .tasks.timer import TimerTask, sleep

__all__ = [
    "AndThen",
    "Collect",
    "CountingStream",
    "Delayed",
    "DelayedCache",
    "DriveStats",
    "Err",
    "Executor",
    "Finished",
    "Immediate",
    "Join",
    "Map",
    "MonotonicClock",
    "Ok",
    "PENDING",
    "Pending",
    "PollResult",
    "Processing",
    "Ready",
    "ReentrantDriveError",
    "Result",
    "Retry",
    "Start",
    "StateMachineTask",
    "Stream",
    "StreamProcess",
    "Task",
    "TaskAlreadyCompleted",
    "TaskError",
    "TaskTimeout",
    "Timeout",
    "TimerTask",
    "TryAndThen",
    "UnwrapError",
    "WorkQueue",
    "collect",
    "default_clock",
    "delayed",
    "join",
    "join_all",
    "ready",
    "retry",
    "run",
    "run_async",
    "sleep",
    "stream_process",
    "with_timeout",
]
