"""Utility modules for logging and exception handling."""

from utils.logging import setup_logging, get_logger
from utils.exceptions import (
    RconError,
    TransportError,
    AuthenticationError,
    PayloadTooLargeError,
    MalformedPacketError,
    MalformedPayloadError,
    ConfigurationError,
)

__all__ = [
    'setup_logging',
    'get_logger',
    'RconError',
    'TransportError',
    'AuthenticationError',
    'PayloadTooLargeError',
    'MalformedPacketError',
    'MalformedPayloadError',
    'ConfigurationError',
]
