"""
Centralized logging system for the stage display.

Usage:
    from utils.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Display window opened")
    logger.debug("Render pass finished")
    logger.warning("BUG: Unrecognised background kind")
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
import os

# Log levels
DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL

LOG_FILE_PREFIX = "stage_display"


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name"""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        # Colour a copy so file handlers keep the plain level name
        record = logging.makeLogRecord(record.__dict__)
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        return super().format(record)


def resolve_level(level=None):
    """
    Resolve a logging level from an explicit value or the environment.

    Args:
        level: int level, level name ("debug", "INFO"...) or None

    Returns:
        int logging level
    """
    if level is None:
        if os.getenv('STAGE_DISPLAY_DEBUG', '0') == '1':
            return logging.DEBUG
        level = os.getenv('STAGE_DISPLAY_LOG_LEVEL', 'INFO')

    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)

    return level


def setup_logging(level=None, log_to_file=True, log_dir='logs'):
    """
    Configure logging for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
               If None, reads STAGE_DISPLAY_DEBUG / STAGE_DISPLAY_LOG_LEVEL
        log_to_file: Whether to write logs to file
        log_dir: Directory for log files
    """
    level = resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    root_logger.handlers.clear()

    # Console handler with colors
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_formatter = ColoredFormatter(
        fmt='%(levelname)s [%(name)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        log_file = log_path / f"{LOG_FILE_PREFIX}_{datetime.now():%Y%m%d}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_formatter = logging.Formatter(
            fmt='%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    return root_logger


def get_logger(name):
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (usually __name__)

    Returns:
        logging.Logger instance
    """
    return logging.getLogger(name)


# Console-only until main.py knows where the logs directory lives
setup_logging(log_to_file=False)
