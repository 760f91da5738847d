"""
Logging configuration and utilities.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional


SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


class StatusFormatter(logging.Formatter):
    """Prefixes each record with a short status tag an operator can scan for."""

    TAGS = {
        logging.DEBUG: ("[DBG ]", "\033[1;90m"),
        logging.INFO: ("[INFO]", "\033[1;34m"),
        SUCCESS: ("[ OK ]", "\033[1;32m"),
        logging.WARNING: ("[WARN]", "\033[1;33m"),
        logging.ERROR: ("[ERR ]", "\033[1;31m"),
        logging.CRITICAL: ("[ERR ]", "\033[1;31m"),
    }
    RESET = "\033[0m"

    def __init__(self, color: bool = True):
        super().__init__("%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        tag, color = self.TAGS.get(record.levelno, ("[....]", ""))
        if self.color and color:
            tag = f"{color}{tag}{self.RESET}"
        return f"{tag} {message}"


def color_supported(stream=None) -> bool:
    """Check whether ANSI colors should be written to the given stream."""
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream or sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


def log_success(logger: logging.Logger, message: str, *args) -> None:
    """Emit a record at the SUCCESS level."""
    logger.log(SUCCESS, message, *args)


def setup_root_logger(log_file: Optional[Path] = None,
                      level: str = "INFO",
                      color: Optional[bool] = None):
    """
    Set up the root logger for the application.

    Args:
        log_file: Optional log file path
        level: Logging level
        color: Force colored tags on or off (auto-detected when None)
    """
    root_logger = logging.getLogger()

    # Clear any existing handlers
    root_logger.handlers.clear()

    root_logger.setLevel(getattr(logging, level.upper()))

    console_handler = logging.StreamHandler(sys.stderr)
    if color is None:
        color = color_supported(sys.stderr)
    console_handler.setFormatter(StatusFormatter(color=color))
    root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
        root_logger.addHandler(file_handler)
