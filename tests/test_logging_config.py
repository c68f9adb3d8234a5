"""
Logging Setup Tests
===================
setup_logging wiring: handlers, daily file, level names and the capped
HTTP client loggers.
"""
import logging
from datetime import datetime

import pytest

from intake.utils.logging_config import ColoredFormatter, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root.setLevel(level)


def test_daily_log_file_created(tmp_path):
    setup_logging(level=logging.INFO, log_dir=str(tmp_path))
    logging.getLogger("intake.test").info("session s-1 started")

    log_file = tmp_path / f"intake_{datetime.now().strftime('%Y%m%d')}.log"
    assert log_file.exists()
    assert "session s-1 started" in log_file.read_text()


def test_empty_log_dir_disables_file(tmp_path):
    setup_logging(level=logging.INFO, log_dir="")
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, ColoredFormatter)


def test_level_name_accepted():
    setup_logging(level="DEBUG", log_dir="")
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("intake").level == logging.DEBUG


def test_http_client_loggers_capped_at_warning():
    setup_logging(level="DEBUG", log_dir="")
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_repeated_setup_does_not_duplicate_handlers(tmp_path):
    setup_logging(level=logging.INFO, log_dir=str(tmp_path))
    setup_logging(level=logging.INFO, log_dir=str(tmp_path))
    assert len(logging.getLogger().handlers) == 2
