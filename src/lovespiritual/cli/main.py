# src/lovespiritual/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading saved tasks), then runs the
console session until `bye`.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        state = create_initial_state(settings=settings)
    except OSError:
        logger.exception("Could not read tasks from %s", settings.data_file)
        print(f"Could not read tasks from {settings.data_file}.", file=sys.stderr)
        raise SystemExit(1)

    run_console_loop(state)
    logger.info("Bye.")


if __name__ == "__main__":
    main()
