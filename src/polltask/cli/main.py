# src/polltask/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs one demo command:

    polltask join 100 200 300
    polltask retry 2 3
    polltask            (prints help)
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry
from ..config import get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(
        log_dir=getattr(settings, "log_dir", ".local/polltask"),
        console_level=console_level,
        log_to_file=bool(getattr(settings, "log_to_file", False)),
    )

    state = create_initial_state(settings=settings)

    line = "/" + " ".join(argv) if argv else "/help"
    logger.debug("Running %s (%s)", line, getattr(settings, "app_name", "polltask"))

    try:
        reply = registry.handle(state, line, emit=print)
    except ValueError as e:
        print(f"Invalid arguments: {e}")
        return 2
    except Exception:
        logger.exception("Command failed: %s", line)
        print("Command failed; see log for details.")
        return 1

    if reply:
        print(reply)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
