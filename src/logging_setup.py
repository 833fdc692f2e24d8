"""Logging configuration.

The terminal belongs to the board while it runs, so records go to a log file
under the kanban home instead of stderr.
"""
import logging
import os
from pathlib import Path
from typing import Optional

from paths import get_log_path

ENV_LEVEL = "KANBAN_LOG_LEVEL"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level: Optional[str] = None, log_file: Optional[Path] = None) -> None:
    """Configure root logging once at startup.

    Args:
        level: Log level name. If None, uses KANBAN_LOG_LEVEL or WARNING.
        log_file: Destination file. Defaults to <kanban home>/kanban.log.
    """
    if level is None:
        level = os.environ.get(ENV_LEVEL, "WARNING")
    level = level.upper()
    if level not in LEVELS:
        level = "WARNING"

    path = log_file or get_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.basicConfig(level=getattr(logging, level), handlers=[handler], force=True)
