# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/polltask/config.py for parsing and defaults.

This file exists to make the repo self-documenting even without opening the code.
"""

ENV_VARS = {
    # App / logging
    "POLLTASK_APP_NAME": "App display name (default: polltask).",
    "POLLTASK_LOG_LEVEL": "Console logging level (default: INFO).",
    "POLLTASK_LOG_DIR": "Directory for the log file (default: .local/polltask).",
    "POLLTASK_LOG_TO_FILE": "Also write full DEBUG logs to <log_dir>/polltask.log (true/false).",
    # Driver
    "POLLTASK_POLL_INTERVAL_SECONDS": "Sleep hint between polls of a Pending task (default: 0.001).",
    # Retry / timeout
    "POLLTASK_RETRY_MAX_ATTEMPTS": "Attempts before retry gives up (default: 3, minimum 1).",
    "POLLTASK_RETRY_BASE_DELAY_SECONDS": "Backoff base; delay before attempt n+1 is base * 2^(n-1) (default: 0.1).",
    "POLLTASK_TIMEOUT_SECONDS": "Default deadline used by the timeout demo (default: 1.0).",
    # State machine
    "POLLTASK_STATE_THRESHOLD": "Processing steps before Finished (default: 3).",
    "POLLTASK_STATE_START_DELAY_SECONDS": "Wait in Start (default: 0.1).",
    "POLLTASK_STATE_STEP_DELAY_SECONDS": "Wait per Processing step (default: 0.05).",
    # Simulated work
    "POLLTASK_ITEM_DELAY_SECONDS": "Per-item delay in the pipeline demo (default: 0.01).",
    "POLLTASK_STREAM_DELAY_SECONDS": "Per-item delay of the counting stream (default: 0.1).",
}
