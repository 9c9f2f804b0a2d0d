from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, log file rotation and the crash-report log tail.
"""

import logging
import queue
from pathlib import Path

import pytest

from sitemaptree.infra.logging import (
    _CONFIGURED_FLAG_ATTR,
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
    create_ui_queue_handler,
    get_recent_logs,
    shutdown_logging,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Release our handlers and restore the root level around each test."""
    root = logging.getLogger()
    original_level = root.level
    shutdown_logging()
    yield
    shutdown_logging()
    root.setLevel(original_level)


def _our_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_logging_idempotency() -> None:
    """Repeated configuration does not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    initial_handler_count = len(_our_handlers())

    configure_logging(cfg)
    assert len(_our_handlers()) == initial_handler_count, "Handlers were duplicated."


def test_force_reconfigures_level() -> None:
    configure_logging(LoggingConfig(level="INFO", console=True))
    configure_logging(LoggingConfig(level="debug", console=True), force=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(_our_handlers()) == 1


def test_log_rotation(tmp_path: Path) -> None:
    """File rotation when the size limit is exceeded."""
    log_file = tmp_path / "logs" / "test_rotate.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")

    for _ in range(10):
        logger.debug("Laying out a long sitemap branch to trigger rotation. " * 5)

    # Flushes the listener thread
    shutdown_logging()

    backup_file = tmp_path / "logs" / "test_rotate.log.1"
    assert log_file.exists()
    assert backup_file.exists(), "Rotation backup file was not created."


def test_queue_listener_architecture() -> None:
    """The root logger writes through a single tagged QueueHandler."""
    configure_logging(LoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    assert len(_our_handlers()) == 1
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not None
    assert getattr(root, _CONFIGURED_FLAG_ATTR) is True


def test_shutdown_detaches_everything() -> None:
    configure_logging(LoggingConfig(level="INFO", console=True))
    shutdown_logging()

    root = logging.getLogger()
    assert _our_handlers() == []
    assert getattr(root, _QUEUE_LISTENER_ATTR, None) is None
    assert not hasattr(root, _CONFIGURED_FLAG_ATTR)


def test_ui_queue_handler_receives_records() -> None:
    target: "queue.Queue[logging.LogRecord]" = queue.Queue()
    handler = create_ui_queue_handler(target, level=logging.WARNING)
    logger = logging.getLogger("test_ui_queue")
    logger.addHandler(handler)
    try:
        logger.info("hidden")
        logger.warning("Cannot load sitemap")
    finally:
        logger.removeHandler(handler)

    record = target.get(timeout=1)
    assert record.getMessage() == "Cannot load sitemap"
    assert target.empty()
    assert getattr(handler, _HANDLER_TAG_ATTR, False)


def test_recent_logs_tail(tmp_path: Path) -> None:
    log_file = tmp_path / "app.log"
    log_file.write_text("".join(f"line {i}\n" for i in range(10)), encoding="utf-8")

    assert get_recent_logs(3, log_path=str(log_file)) == "line 7\nline 8\nline 9\n"
    assert get_recent_logs(log_path=str(tmp_path / "missing.log")) == "Log file not found."


def test_file_output_is_written(tmp_path: Path) -> None:
    log_file = tmp_path / "app.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))

    logging.getLogger("sitemaptree.test").info("Loaded 7 nodes")
    logging.getLogger("sitemaptree.test").debug("not captured")
    shutdown_logging()

    content = log_file.read_text(encoding="utf-8")
    assert "Loaded 7 nodes" in content
    assert "not captured" not in content
