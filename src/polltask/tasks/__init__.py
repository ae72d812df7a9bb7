"""
Task subsystem.

Components:
- timer.py: TimerTask, the time-based readiness primitive
- executor.py: the driver loop (run / Executor / run_async)
- join.py: concurrent wait for N tasks
- retry.py: retry with exponential backoff
- timeout.py: deadline wrapper
- pipeline.py: strictly sequential per-item processing + WorkQueue
- state_machine.py: explicit Start/Processing/Finished task
- chain.py: Delayed / Map / AndThen / TryAndThen
- stream.py: poll-driven streams (CountingStream, Collect)
- cache.py: key/value cache with simulated latency
"""
