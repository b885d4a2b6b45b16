"""
Logging configuration for isrctag.
Provides centralized logging setup with console output only.
"""

import logging
import sys
from typing import Optional
from .config import LOGGING_CONFIG


def setup_logging(
    level: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Set up logging configuration for the application.
    Console output only - no file logging. Records go to stderr so they never
    mix with the prompts and summaries printed on stdout.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Whether to enable console logging

    Returns:
        Configured package logger
    """
    level_name = (level or LOGGING_CONFIG["LEVEL"]).upper()
    log_level = getattr(logging, level_name, None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root_logger = logging.getLogger("isrctag")
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter(LOGGING_CONFIG["FORMAT"]))
        root_logger.addHandler(console_handler)
    else:
        root_logger.addHandler(logging.NullHandler())

    root_logger.propagate = False

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name, either a module ``__name__`` or a name relative
            to the package (e.g. "clients.deezer")

    Returns:
        Logger instance
    """
    if not logging.getLogger("isrctag").handlers:
        setup_logging()

    if name == "isrctag" or name.startswith("isrctag."):
        return logging.getLogger(name)
    return logging.getLogger(f"isrctag.{name}")
