"""Custom exception classes for the RCON client."""


class RconError(Exception):
    """Base exception class for all RCON-related errors."""
    pass


class TransportError(RconError):
    """Exception raised when reading from or writing to the stream fails."""
    pass


class AuthenticationError(RconError):
    """Exception raised when the server rejects the password."""
    pass


class PayloadTooLargeError(RconError):
    """Exception raised when a payload exceeds the configured size limit."""
    pass


class MalformedPacketError(RconError):
    """Exception raised when a received packet cannot be framed."""
    pass


class MalformedPayloadError(MalformedPacketError):
    """Exception raised when a received packet was read whole but cannot be decoded."""
    pass


class ConfigurationError(RconError):
    """Exception raised when configuration is invalid or missing."""
    pass
