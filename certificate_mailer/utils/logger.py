"""Logging configuration for the application.

Console records go through rich so they sit cleanly beside the ui output;
the optional log file gets plain formatted lines.
"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from certificate_mailer import config

LOGGER_NAME = "CertificateMailer"

_logger: Optional[logging.Logger] = None


def _console_handler(level: int) -> logging.Handler:
    handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        show_path=config.DEBUG,
        rich_tracebacks=config.DEBUG,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    log_dir = os.path.dirname(path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = logging.FileHandler(path, mode='a', encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
    return handler


def build_logger(name: str, level: int, log_file: str = "") -> logging.Logger:
    """Attaches the console handler, and a file handler when log_file is set.

    Handlers are only added to a logger that has none, so calling this twice
    for the same name does not duplicate output.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler(level))
    if log_file:
        try:
            logger.addHandler(_file_handler(log_file, level))
        except OSError as e:
            logger.error(f"Failed to create file handler for {log_file}: {e}", exc_info=config.DEBUG)
    return logger


def setup_logger() -> logging.Logger:
    """Sets up and returns the application logger."""
    global _logger
    if _logger is None:
        _logger = build_logger(LOGGER_NAME, config.LOG_LEVEL, config.LOG_FILE)
        _logger.debug("Logger initialized in DEBUG mode.")
    return _logger


def get_logger() -> logging.Logger:
    """Returns the singleton logger instance, setting it up if necessary."""
    if _logger is None:
        return setup_logger()
    return _logger
