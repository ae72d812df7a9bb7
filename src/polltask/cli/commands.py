# src/polltask/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.result import Err, Ok, Result
from ..core.state import AppState
from ..core.task import Immediate, Task
from ..tasks.cache import DelayedCache
from ..tasks.chain import AndThen, Delayed, Map, TryAndThen
from ..tasks.join import join_all
from ..tasks.pipeline import WorkQueue, stream_process
from ..tasks.retry import Retry
from ..tasks.state_machine import StateMachineTask
from ..tasks.stream import CountingStream, collect
from ..tasks.timeout import Timeout
from ..tasks.timer import TimerTask

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the CLI (/help, /join, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Dispatching /%s %s", name, args)
        return handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _setting(state: AppState, name: str, default):
    return getattr(state.settings, name, default)


def _ints(args: list[str], default: list[int]) -> list[int]:
    if not args:
        return list(default)
    return [int(a) for a in args]


def _positional(args: list[str], defaults: list[int]) -> list[int]:
    """Parse up to len(defaults) ints; missing trailing values use defaults."""
    parsed = [int(a) for a in args[: len(defaults)]]
    return parsed + defaults[len(parsed):]


def _ms(seconds: float) -> str:
    return f"{seconds * 1000:.0f}ms"


# --------------------------------------------------------------------------------------
# Simulated work
# --------------------------------------------------------------------------------------


def fallible_operation(should_fail: bool, *, delay: float = 0.05, clock=None) -> Task[Result[str, str]]:
    def _outcome() -> Result[str, str]:
        if should_fail:
            return Err("operation failed")
        return Ok("operation succeeded")

    return Delayed(delay, _outcome, clock=clock)


def async_factorial(n: int, *, step_delay: float = 0.01, clock=None) -> Task[int]:
    """n! where every recursion level waits `step_delay` first."""
    if n <= 1:
        return Immediate(1)
    wait = TimerTask(step_delay, clock=clock)
    return AndThen(
        wait,
        lambda _: Map(async_factorial(n - 1, step_delay=step_delay, clock=clock), lambda r: n * r),
    )


# --------------------------------------------------------------------------------------
# Commands
# --------------------------------------------------------------------------------------


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_timer(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """timer [ms]"""
    (ms,) = _positional(args, [500])
    timer = TimerTask(ms / 1000.0, clock=state.clock)
    state.executor.run(timer)
    stats = state.executor.last_stats
    elapsed = stats.elapsed if stats else timer.elapsed
    return f"Timer of {ms}ms finished in {_ms(elapsed)}"


def cmd_join(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """join [ms ...] -> wait for all timers concurrently"""
    durations = _ints(args, [100, 200, 300])
    tasks = [
        Map(TimerTask(ms / 1000.0, clock=state.clock), lambda _, ms=ms: f"timer {ms}ms")
        for ms in durations
    ]
    started = state.clock.now()
    outputs = state.executor.run(join_all(tasks))
    elapsed = state.clock.now() - started
    return (
        f"Joined {len(outputs)} tasks in {_ms(elapsed)} "
        f"(sum would be {sum(durations)}ms): {outputs}"
    )


def cmd_retry(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """retry [fail_times] [max_attempts]"""
    defaults = [2, int(_setting(state, "retry_max_attempts", 3))]
    fail_times, max_attempts = _positional(args, defaults)
    calls = {"n": 0}

    def operation() -> Task[Result[str, str]]:
        calls["n"] += 1
        return fallible_operation(calls["n"] <= fail_times, clock=state.clock)

    def on_retry(attempt: int, error, delay: float) -> None:
        if emit is not None:
            emit(f"  attempt {attempt} failed ({error}); retrying in {_ms(delay)}")

    task = Retry(
        operation,
        max_attempts=max_attempts,
        base_delay=float(_setting(state, "retry_base_delay_seconds", 0.1)),
        clock=state.clock,
        on_retry=on_retry,
    )
    outcome = state.executor.run(task)
    if isinstance(outcome, Ok):
        return f"Succeeded after {task.attempts} attempt(s): {outcome.value}"
    return f"Failed after {task.attempts} attempt(s): {outcome.error}"


def cmd_timeout(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """timeout [work_ms] [limit_ms]"""
    default_limit = int(float(_setting(state, "timeout_seconds", 1.0)) * 1000)
    defaults = [500, default_limit]
    work_ms, limit_ms = _positional(args, defaults)
    work = Delayed(work_ms / 1000.0, lambda: f"work of {work_ms}ms done", clock=state.clock)
    outcome = state.executor.run(Timeout(work, limit_ms / 1000.0, clock=state.clock))
    if isinstance(outcome, Ok):
        return f"Completed: {outcome.value}"
    return f"Timed out: {outcome.error}"


def cmd_pipeline(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """pipeline [items ...] -> double each item, one at a time"""
    items = _ints(args, [1, 2, 3, 4, 5])
    delay = float(_setting(state, "item_delay_seconds", 0.01))
    results = state.executor.run(
        stream_process(items, lambda x: Delayed(delay, lambda: x * 2, clock=state.clock))
    )
    return f"Processed {items} -> {results}"


def cmd_state(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    machine = StateMachineTask(
        threshold=int(_setting(state, "state_threshold", 3)),
        start_delay=float(_setting(state, "state_start_delay_seconds", 0.1)),
        step_delay=float(_setting(state, "state_step_delay_seconds", 0.05)),
        clock=state.clock,
    )
    result = state.executor.run(machine)
    if emit is not None:
        for snapshot in machine.history:
            emit(f"  {snapshot}")
    return f"State machine: {result}"


def cmd_stream(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """stream [count]"""
    (count,) = _positional(args, [5])
    delay = float(_setting(state, "stream_delay_seconds", 0.1))
    numbers = state.executor.run(collect(CountingStream(count, delay=delay, clock=state.clock)))
    return f"Stream produced: {numbers}"


def cmd_cache(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    cache = DelayedCache(clock=state.clock)
    state.executor.run(cache.set("greeting", "hello"))
    hit = state.executor.run(cache.get("greeting"))
    miss = state.executor.run(cache.get("missing"))
    return f"Cache: greeting={hit!r} missing={miss!r}"


def cmd_queue(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    queue = WorkQueue()
    queue.add_task(lambda: "job 1 done")
    queue.add_task(lambda: "job 2 done")
    queue.add_task(lambda: "job 3 done")
    results = state.executor.run(queue.process_all(clock=state.clock))
    return f"Work queue: {results}"


def cmd_factorial(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """factorial [n]"""
    (n,) = _positional(args, [5])
    value = state.executor.run(async_factorial(n, clock=state.clock))
    return f"{n}! = {value}"


def cmd_chain(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """chain [fail] -> two fallible steps; the first Err short-circuits"""
    fail_second = bool(args) and args[0].lower() in ("fail", "1", "true", "yes")

    def second(first: str) -> Task[Result[str, str]]:
        return Map(
            fallible_operation(fail_second, clock=state.clock),
            lambda r: Ok(f"{first} and {r.value}") if isinstance(r, Ok) else r,
        )

    outcome = state.executor.run(TryAndThen(fallible_operation(False, clock=state.clock), second))
    if isinstance(outcome, Ok):
        return f"Combined: {outcome.value}"
    return f"Chain failed: {outcome.error}"


def cmd_prodcons(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    produce = Delayed(0.2, lambda: [1, 2, 3, 4, 5], clock=state.clock)
    pipeline = AndThen(produce, lambda data: Delayed(0.1, lambda: (data, sum(data)), clock=state.clock))
    data, total = state.executor.run(pipeline)
    return f"Produced {data}, consumed sum={total}"


registry.register("help", cmd_help, "Show this help", aliases=["h", "?"])
registry.register("timer", cmd_timer, "Wait on a single timer: timer [ms]")
registry.register("join", cmd_join, "Join timers concurrently: join [ms ...]")
registry.register("retry", cmd_retry, "Retry with backoff: retry [fail_times] [max_attempts]")
registry.register("timeout", cmd_timeout, "Deadline wrapper: timeout [work_ms] [limit_ms]")
registry.register("pipeline", cmd_pipeline, "Sequential processing: pipeline [items ...]")
registry.register("state", cmd_state, "Run the Start/Processing/Finished state machine")
registry.register("stream", cmd_stream, "Collect a counting stream: stream [count]")
registry.register("cache", cmd_cache, "Delayed cache set/get")
registry.register("queue", cmd_queue, "Process a work queue in order")
registry.register("factorial", cmd_factorial, "Recursive task chain: factorial [n]")
registry.register("chain", cmd_chain, "Result chaining with short-circuit: chain [fail]")
registry.register("prodcons", cmd_prodcons, "Producer then consumer")
