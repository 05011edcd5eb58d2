"""
Logging setup for the migration scripts and the API.
Console output always; a per-run file when requested.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that are noisy at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "urllib3")


def _handler(handler: logging.Handler, level: int, fmt: str, datefmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt))
    return handler


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    fmt: str = LOG_FORMAT,
    datefmt: str = LOG_DATE_FORMAT,
) -> None:
    """
    Replace the root handlers with a stdout handler and, optionally, a file handler.

    Args:
        level: Level number or name such as "DEBUG" (unknown names fall back to INFO)
        log_file: Path of a log file; parent directories are created
        fmt: Record format
        datefmt: Timestamp format
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handlers = [_handler(logging.StreamHandler(sys.stdout), level, fmt, datefmt)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), level, fmt, datefmt)
        )

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_from_settings() -> None:
    """configure_logging() driven by LOG_LEVEL / LOG_FILE."""
    from migration.common.config import settings

    configure_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)


def create_run_log_file(base_dir: str = "logs") -> str:
    """Return logs/migration_run_<YYYYmmdd_HHMMSS>.log, creating the directory."""
    directory = Path(base_dir)
    directory.mkdir(parents=True, exist_ok=True)
    return str(directory / f"migration_run_{datetime.now():%Y%m%d_%H%M%S}.log")
