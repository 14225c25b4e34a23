"""Configuration management for the RCON client."""

from dataclasses import dataclass
from typing import Optional
import os
from pathlib import Path

from dotenv import load_dotenv

from protocol.constants import (
    DEFAULT_MAX_PAYLOAD_SIZE,
    DEFAULT_PACKET_ID,
    DEFAULT_PORT,
    INT32_MAX,
    INT32_MIN,
)
from utils.exceptions import ConfigurationError


# Load .env file from project root
# This is called at module import time to ensure env vars are available
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path, override=False)

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Protocol behaviour of a single RCON connection.
    
    Attributes:
        default_packet_id: Value ids reset to when incrementing would
            overflow a signed 32-bit integer; the first id is always 0
        max_payload_size: Largest command or password, in UTF-8 bytes
        multiple_responses: Collect reply packets until an empty one arrives
    """
    
    default_packet_id: int = DEFAULT_PACKET_ID
    max_payload_size: int = DEFAULT_MAX_PAYLOAD_SIZE
    multiple_responses: bool = False
    
    def validate(self) -> None:
        """Validate connection configuration parameters."""
        if not INT32_MIN <= self.default_packet_id <= INT32_MAX:
            raise ValueError("Default packet id must fit in a signed 32-bit integer")
        if self.max_payload_size < 0:
            raise ValueError("Max payload size must not be negative")


@dataclass
class ClientConfig:
    """Configuration for the command-line client."""
    
    host: str
    password: str
    port: int = DEFAULT_PORT
    
    def validate(self) -> None:
        """Validate client configuration parameters."""
        if not self.host:
            raise ValueError("RCON host is required")
        if not isinstance(self.port, int) or self.port < 1 or self.port > 65535:
            raise ValueError("RCON port must be between 1 and 65535")
        if not self.password:
            raise ValueError("RCON password is required")


class Config:
    """Main configuration loader and manager."""
    
    def __init__(self):
        """Initialize configuration manager."""
        self.client: Optional[ClientConfig] = None
        self.connection: Optional[ConnectionConfig] = None
    
    def load_client_config(self) -> ClientConfig:
        """
        Load client configuration from environment variables.
        
        Environment variables:
            RCON_HOST: Server hostname or address (required)
            RCON_PORT: Server port (default: 27015)
            RCON_PASSWORD: RCON password (required)
        
        Returns:
            Validated ClientConfig instance
            
        Raises:
            ConfigurationError: If a required variable is missing or unparsable
            ValueError: If configuration is invalid
        """
        host = os.getenv('RCON_HOST')
        if not host:
            raise ConfigurationError(
                "RCON_HOST environment variable is required. "
                "Example: RCON_HOST=127.0.0.1"
            )
        
        password = os.getenv('RCON_PASSWORD')
        if not password:
            raise ConfigurationError(
                "RCON_PASSWORD environment variable is required"
            )
        
        config = ClientConfig(
            host=host,
            password=password,
            port=_get_int('RCON_PORT', DEFAULT_PORT),
        )
        config.validate()
        self.client = config
        return config
    
    def load_connection_config(self) -> ConnectionConfig:
        """
        Load connection configuration from environment variables.
        
        Environment variables:
            RCON_DEFAULT_PACKET_ID: Sequence id used after overflow (default: 0)
            RCON_MAX_PAYLOAD_SIZE: Command size limit in bytes (default: 4086)
            RCON_MULTIPLE_RESPONSES: Collect multi-packet replies (default: false)
        
        Returns:
            Validated ConnectionConfig instance
            
        Raises:
            ConfigurationError: If a variable cannot be parsed
            ValueError: If configuration is invalid
        """
        config = ConnectionConfig(
            default_packet_id=_get_int('RCON_DEFAULT_PACKET_ID', DEFAULT_PACKET_ID),
            max_payload_size=_get_int('RCON_MAX_PAYLOAD_SIZE', DEFAULT_MAX_PAYLOAD_SIZE),
            multiple_responses=_get_bool('RCON_MULTIPLE_RESPONSES', False),
        )
        config.validate()
        self.connection = config
        return config


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a valid integer, got: {value}")


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got: {value}")
