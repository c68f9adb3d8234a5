import logging
import sys
import os
from datetime import datetime
from typing import Union

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# httpx logs every request URL at INFO; the Slack webhook URL is a credential
_QUIET_LOGGERS = ("httpx", "httpcore")


class ColoredFormatter(logging.Formatter):
    """Console formatter coloring each record by level."""

    cyan = "\x1b[36m"
    green = "\x1b[32m"
    yellow = "\x1b[33m"
    red = "\x1b[31m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"

    FORMATS = {
        logging.DEBUG: cyan + _LOG_FORMAT + reset,
        logging.INFO: green + _LOG_FORMAT + reset,
        logging.WARNING: yellow + _LOG_FORMAT + reset,
        logging.ERROR: red + _LOG_FORMAT + reset,
        logging.CRITICAL: bold_red + _LOG_FORMAT + reset,
    }

    def format(self, record):
        # Custom levels fall back to the plain format
        log_fmt = self.FORMATS.get(record.levelno, _LOG_FORMAT)
        return logging.Formatter(log_fmt, datefmt=_DATE_FORMAT).format(record)


def setup_logging(level: Union[int, str] = logging.INFO, log_dir: str = "logs"):
    """
    Console (stderr, colored) + daily file logging for the intake service.

    level   — logging level or its name ("DEBUG", "INFO", ...)
    log_dir — directory for intake_YYYYMMDD.log; empty string disables the file

    Outbound HTTP client loggers are capped at WARNING so webhook URLs and
    tracker endpoints never reach the log files.
    """
    root_logger = logging.getLogger()

    # Clear existing handlers to prevent duplicate logs
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter())
    root_logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(
            os.path.join(log_dir, f"intake_{datetime.now().strftime('%Y%m%d')}.log")
        )
        file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    for logger_name in ["intake", "uvicorn", "uvicorn.error", "uvicorn.access", "main"]:
        named = logging.getLogger(logger_name)
        named.setLevel(level)
        named.propagate = True

    for logger_name in _QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(root_logger.level, logging.WARNING))

    root_logger.info("Logging initialized (console%s).", " + file" if log_dir else "")
