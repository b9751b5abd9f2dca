"""Loguru sink configuration for the command line."""

import sys

from loguru import logger

LOG_FORMAT = "{time:HH:mm:ss} | {level: <8} | {message}"


def _stderr_sink(message) -> None:
    # Looked up per message so redirected/captured stderr is honoured.
    sys.stderr.write(message)


def configure_logging(level: str = "WARNING") -> None:
    """Enable sessionkeeper logs on stderr at the given level."""
    logger.remove()
    logger.add(_stderr_sink, level=level.upper(), format=LOG_FORMAT)
    logger.enable("sessionkeeper")
