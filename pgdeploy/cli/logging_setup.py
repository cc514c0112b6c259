"""loguru configuration for the CLI.

Console output for the user goes through the Rich console; loguru carries
diagnostics (kubectl invocations, step outcomes) to stderr.
"""

from __future__ import annotations

import os
import sys

from loguru import logger

LOG_LEVEL_ENV = "PGDEPLOY_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def _stderr_sink(message: str) -> None:
    # Looked up per message; sys.stderr may be swapped after configuration
    sys.stderr.write(message)


def configure_logging(verbose: bool = False) -> str:
    """Replace loguru's default sink with a stderr sink.

    Args:
        verbose: Log at DEBUG regardless of the environment

    Returns:
        The level the sink was configured with
    """
    level = "DEBUG" if verbose else os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    if level not in LOG_LEVELS:
        level = DEFAULT_LOG_LEVEL
    logger.remove()
    logger.add(_stderr_sink, level=level, format=LOG_FORMAT, colorize=False)
    logger.debug(f"Logging configured at {level}")
    return level
