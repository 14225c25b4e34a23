"""Logging configuration and utilities."""

from typing import Optional, TextIO
import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """
    Configure logging for the RCON client.
    
    Command output goes to stdout, so log records are written to
    stderr unless another stream is given.
    
    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Destination for log records (default: sys.stderr)
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')
    
    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(stream or sys.stderr)
        ],
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (typically called with __name__)."""
    return logging.getLogger(name)
