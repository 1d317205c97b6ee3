# src/mef2bids/utils/logging.py
"""Logging utilities for the mef2bids package."""

import logging
import os
import sys
import warnings
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from loguru import logger

# Remove default handler
logger.remove()

# Standard levels are already defined by loguru (DEBUG, INFO, SUCCESS,
# WARNING, ERROR, CRITICAL); only HEADER is added here.
logger.level("HEADER", no=28, color="<blue>", icon="🧠")


class WarningToLogger:
    """Redirect ``warnings.showwarning`` into loguru, skipping repeats."""

    def __init__(self):
        self._last_warning = None

    def __call__(self, message, category, filename, lineno, file=None, line=None):
        warning_key = (str(message), category, filename, lineno)
        if warning_key == self._last_warning:
            return
        self._last_warning = warning_key

        logger.warning(f"{category.__name__}: {str(message)}")


warning_handler = WarningToLogger()
warnings.showwarning = warning_handler


class LogLevel(str, Enum):
    """Log levels understood by :func:`configure_logger`.

    - DEBUG = 10
    - INFO = 20
    - SUCCESS = 25 (built into loguru)
    - HEADER = 28 (custom)
    - WARNING = 30
    - ERROR = 40
    - CRITICAL = 50
    """

    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    HEADER = "HEADER"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_value(cls, value: Union[str, int, bool, None]) -> "LogLevel":
        """Convert various input types to LogLevel.

        Args:
            value: Input value that can be:
                - str: One of the level names (case-insensitive)
                - int: Standard Python logging level (10, 20, 30, 40, 50)
                - bool: True for DEBUG, False for INFO
                - None: Use MEF2BIDS_LOGGING_LEVEL env var or default to INFO

        Returns:
            LogLevel: The corresponding log level
        """
        if value is None:
            env_level = os.getenv("MEF2BIDS_LOGGING_LEVEL", "INFO")
            return cls.from_value(env_level)

        if isinstance(value, bool):
            return cls.DEBUG if value else cls.INFO

        if isinstance(value, int):
            level_map = {
                logging.DEBUG: cls.DEBUG,
                logging.INFO: cls.INFO,
                logging.WARNING: cls.WARNING,
                logging.ERROR: cls.ERROR,
                logging.CRITICAL: cls.CRITICAL,
            }
            # Closest level that's less than or equal to the input
            for level in sorted(level_map, reverse=True):
                if value >= level:
                    return level_map[level]
            return cls.DEBUG

        if isinstance(value, str):
            try:
                return cls(value.upper())
            except ValueError:
                return cls.INFO

        return cls.INFO


def message(level: str, text: str) -> None:
    """
    Log ``text`` at ``level`` through loguru.

    Parameters
    ----------
    level : str
        Log level ('debug', 'info', 'success', 'warning', 'error', ...)
    text : str
        Message text to log
    """
    logger.log(level.upper(), text)


def configure_logger(
    verbose: Optional[Union[bool, str, int, LogLevel]] = None,
    log_dir: Optional[Union[str, Path]] = None,
) -> LogLevel:
    """
    Configure the console (and optionally file) sinks.

    Parameters
    ----------
    verbose : bool, str, int, LogLevel, optional
        Controls logging verbosity, see :meth:`LogLevel.from_value`.
    log_dir : str or Path, optional
        When given, a rotating log file is written to this directory.

    Returns
    -------
    LogLevel
        The resolved level.
    """
    logger.remove()

    level = LogLevel.from_value(verbose)

    logger.add(
        sys.stderr,
        level=level.value,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        colorize=True,
        backtrace=True,
        diagnose=False,
        catch=True,
    )

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_dir / "mef2bids_{time}.log"),
            rotation="1 day",
            retention="1 week",
            compression="zip",
            level=level.value,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
            backtrace=True,
            diagnose=False,
            catch=True,
        )

    return level


# Console-only defaults (reads MEF2BIDS_LOGGING_LEVEL)
configure_logger()
