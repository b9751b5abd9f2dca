"""sessionkeeper - inspect and clean up Claude Code session transcripts."""

from loguru import logger

__version__ = "0.1.0"

# Library code stays quiet unless the application opts in.
logger.disable("sessionkeeper")
