"""
Logging Configuration
Sets up the 'geoops' logger for command-line use.
"""
import logging
import os
import sys
from typing import Optional, Union

from .config import LOG_LEVEL_ENV


def verbosity_to_level(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def resolve_log_level(verbosity: int = 0) -> Union[int, str]:
    """
    The GEOOPS_LOG_LEVEL environment variable wins over -d flags.
    Unknown level names are ignored.
    """
    env = (os.environ.get(LOG_LEVEL_ENV) or "").strip().upper()
    # getLevelName maps known names to their int, anything else to "Level X"
    if env and isinstance(logging.getLevelName(env), int):
        return env
    return verbosity_to_level(verbosity)


def setup_logging(level: Union[int, str] = logging.WARNING, stream: Optional[object] = None) -> logging.Logger:
    """
    Configures the logger for the 'geoops' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG or "DEBUG")
        stream: Target stream, stderr by default; stdout carries command output.
    """
    logger = logging.getLogger("geoops")
    logger.setLevel(level)

    # avoid duplicate lines when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    ))
    logger.addHandler(handler)

    logger.debug("Logging initialized.")
    return logger
