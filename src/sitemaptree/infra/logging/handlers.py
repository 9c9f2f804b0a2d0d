from __future__ import annotations

"""
Logging Handler Factories.

Builds the handlers attached by `configure_logging` and tags each one, so a
later reconfiguration detaches exactly the handlers this application created
and leaves handlers installed by pytest or third-party code alone.
"""

import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_sitemaptree_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open a size-rotated UTF-8 log file.

    Returns None (after a note on stderr) when the file cannot be opened, so
    a read-only data directory never prevents the application from starting.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh


def create_ui_queue_handler(
        target: "queue.Queue[logging.LogRecord]",
        level: int = logging.INFO,
) -> QueueHandler:
    """
    Build a tagged handler that copies records into `target`.

    The GUI drains the queue from its main loop to fill the logs console.
    """
    handler = QueueHandler(target)
    handler.setLevel(level)
    _tag_handler(handler)
    return handler
