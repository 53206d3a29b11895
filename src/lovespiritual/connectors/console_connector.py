# src/lovespiritual/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..cli.commands import ResultKind
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

SEPARATOR = "_" * 30

UNEXPECTED_ERROR = "Something went wrong (╥﹏╥) Please try that again."
SAVE_FAILED = "Hmm (・_・;) I couldn't save your tasks to disk. They're still here for now."


def print_block(lines: Iterable[str]) -> None:
    """Print lines framed by separator lines."""
    print(SEPARATOR)
    for line in lines:
        print(line)
    print(SEPARATOR)


def _welcome_lines(app_name: str) -> list[str]:
    return [
        f"Hello! I'm {app_name} (◕‿◕)",
        "What can I do for you today?",
    ]


def _persist(state: AppState) -> bool:
    try:
        state.store.save(state.tasks)
    except Exception:
        logger.exception("Failed to save tasks to %s", state.store.path)
        return False
    return True


def run_console_loop(state: AppState) -> None:
    """
    Read one command per line from stdin until `bye` (or end of input).

    Validation problems are shown and the loop goes on; any other exception is
    logged and reported with a generic message. The task list is saved after
    every command that changed it.
    """
    logger.info("Console session started (tasks=%d).", len(state.tasks))
    print_block(_welcome_lines(state.settings.app_name))

    while True:
        try:
            line = input().strip()
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input closed, saving and exiting.")
            if not _persist(state):
                print_block([SAVE_FAILED])
            break
        except UnicodeDecodeError:
            # Undecodable stdin bytes cost only that line.
            logger.exception("Could not read console input.")
            print_block([UNEXPECTED_ERROR])
            continue

        try:
            result = command_registry.handle(state.tasks, line)
        except Exception:
            logger.exception("Command handler crashed (input=%r).", line)
            print_block([UNEXPECTED_ERROR])
            continue

        saved = _persist(state) if result.mutated else True
        print_block(result.lines)
        if not saved:
            print_block([SAVE_FAILED])

        if result.kind is ResultKind.VALIDATION_ERROR:
            logger.debug("Rejected input %r: %s", line, result.text)
        elif result.kind is ResultKind.EXIT:
            break

    logger.info("Console session finished.")
