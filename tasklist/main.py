from __future__ import annotations

import argparse
import logging

from tasklist.config import SETTINGS
from tasklist.infra.logging import setup_logging
from tasklist.services.task_store import TaskStore
from tasklist.ui.console import ConsoleShell

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tasklist", description="Console to-do list.")
    parser.add_argument(
        "--file",
        default=SETTINGS.tasks_file,
        help=f"task file to load and save (default: {SETTINGS.tasks_file})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    logger.info("Using task file %s", args.file)

    store = TaskStore(args.file)
    ConsoleShell(store).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
