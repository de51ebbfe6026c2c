"""
Logging setup shared by the command line and the API.
"""
import sys

from loguru import logger


LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level}</level> | {name}: {message}"


def configure_logging(level: str = 'INFO') -> None:
    """Replace loguru's default sink with a single stderr sink at `level`."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
