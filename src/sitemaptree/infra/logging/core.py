from __future__ import annotations

"""
Logging Core Orchestrator.

Configures the root logger once per process. Records are pushed through a
QueueHandler and written by a QueueListener thread, so writing the log file
never stalls the Tk main loop while a diagram animation is running.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from sitemaptree.infra.fs import get_user_data_dir
from sitemaptree.infra.logging.config import _LEVEL_MAP, LoggingConfig
from sitemaptree.infra.logging.handlers import (
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_sitemaptree_configured"
_QUEUE_LISTENER_ATTR: str = "_sitemaptree_queue_listener"

LOG_FILE_NAME = "sitemaptree.log"

# ==============================================================================
# PUBLIC API
# ==============================================================================


def get_default_log_path(file_name: str = LOG_FILE_NAME) -> str:
    """Return `<user data dir>/logs/<file_name>`."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach the application's handlers to the root logger.

    Calling it again is a no-op unless `force` is set, in which case the
    previously attached handlers and listener are released first.

    Args:
        cfg: Logging settings.
        force: Rebuild the handlers even if logging was already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level_int = _parse_level(cfg.level)
    root.setLevel(level_int)

    _remove_our_handlers(root)
    _stop_existing_listener(root)

    sinks: List[logging.Handler] = []

    if cfg.console:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(level_int)
        sh.setFormatter(logging.Formatter(cfg.console_fmt))
        _tag_handler(sh)
        sinks.append(sh)

    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            sinks.append(fh)

    if not sinks:
        return root

    log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue(-1)
    queue_handler = QueueHandler(log_queue)
    _tag_handler(queue_handler)

    listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
    listener.start()
    root.addHandler(queue_handler)

    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    atexit.register(_safe_stop_listener, listener)

    return root


def shutdown_logging() -> None:
    """Flush pending records and detach every handler this module installed."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_recent_logs(n_lines: int = 100, log_path: Optional[str] = None) -> str:
    """
    Return the last `n_lines` of the log file, for the crash dialog.

    Args:
        n_lines: Maximum number of trailing lines.
        log_path: File to read (defaults to the GUI log file).
    """
    path = log_path or get_default_log_path()
    if not os.path.exists(path):
        return "Log file not found."

    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return "".join(f.readlines()[-n_lines:])
    except OSError as e:
        return f"Error retrieving logs: {e}"


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================


def _parse_level(level: str) -> int:
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener once; later calls (atexit, tests) are ignored."""
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
        for handler in listener.handlers:
            handler.close()
