"""Logging configuration."""

import sys

from loguru import logger


def setup_logger(verbose: bool = False, debug: bool = False) -> None:
    """Configure the loguru logger for command-line use.

    Removes any previously installed sinks and adds a single stderr sink.

    Args:
        verbose: Show INFO messages
        debug: Show DEBUG messages (implies verbose)
    """
    logger.remove()

    if debug:
        level = "DEBUG"
        log_format = "<level>{level: <8}</level> <cyan>{name}</cyan>:{line} - {message}"
    elif verbose:
        level = "INFO"
        log_format = "{message}"
    else:
        level = "WARNING"
        log_format = "<level>{level}</level>: {message}"

    logger.add(sys.stderr, level=level, format=log_format, colorize=None)
