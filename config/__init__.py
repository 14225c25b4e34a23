"""Configuration module for managing client settings."""

from config.settings import (
    ConnectionConfig,
    ClientConfig,
    Config,
)

__all__ = [
    'ConnectionConfig',
    'ClientConfig',
    'Config',
]
