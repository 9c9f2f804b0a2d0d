from __future__ import annotations

"""
Logging Configuration Models.

Declares the settings consumed by `configure_logging` and the mapping from
level names (as typed on the command line or stored in preferences) to the
numeric constants of the `logging` module.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings of the logging subsystem.

    Attributes:
        level: Minimum severity captured by every handler.
        console: Emit records to stderr.
        log_file: Rotating log file path (None disables file output).
        max_bytes: Size threshold that triggers a rollover.
        backup_count: Rolled-over files kept next to the active one.
        console_fmt: Record format on the terminal.
        file_fmt: Record format in the log file.
        datefmt: Timestamp format of the log file.
    """

    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
