"""
Logging setup for daybook, built on loguru.

Library code just does ``from loguru import logger``. Front ends call
``setup_logging_from_config`` once at startup so the ``logging.*`` config
section decides the level and whether a journal log file is kept.
"""

import os
import sys

from loguru import logger

from ..config import Config

CONSOLE_FORMAT = "<level>[{level.name}]</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_dir: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Replace loguru's sinks with a stderr sink and an optional file sink.

    Args:
        level: Minimum level name, any case (debug, INFO, ...).
        log_file: Log file path. A bare or relative name is placed in *log_dir*.
        log_dir: Directory for relative log files; created if missing.
        rotation: Size at which the log file rotates.
        retention: How long rotated files are kept.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if not log_file:
        return
    path = os.path.expanduser(log_file)
    if log_dir and not os.path.isabs(path):
        path = os.path.join(os.path.expanduser(log_dir), path)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    logger.add(path, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention)


def setup_logging_from_config(config: Config, level: str | None = None) -> None:
    """Configure logging from ``logging.level``/``logging.file``; *level* overrides the config."""
    setup_logging(
        level=level or config.get("logging.level", "WARNING"),
        log_file=config.get("logging.file") or None,
        log_dir=config.get("paths.log_dir"),
    )
