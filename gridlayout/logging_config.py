"""Logging configuration for the command line."""

import logging
import sys


def setup_logging(log_level: str = "WARNING") -> logging.Logger:
    """Configure console logging for the gridlayout package.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        The configured package logger
    """
    level = getattr(logging, log_level.upper())

    logger = logging.getLogger("gridlayout")
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    return logger
