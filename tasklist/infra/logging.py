from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from tasklist.config import SETTINGS, Settings


def log_file_path(settings: Settings = SETTINGS) -> Path:
    # Relative log dirs resolve against the working directory, like the task file.
    return Path(settings.log_dir) / "tasklist.log"


def setup_logging(settings: Settings = SETTINGS) -> None:
    log_file = log_file_path(settings)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=3)
    file_handler.setFormatter(formatter)

    # Keep the menu readable: only problems reach the terminal.
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.WARNING)

    logging.basicConfig(
        level=settings.log_level.upper(),
        handlers=[file_handler, console_handler],
    )
