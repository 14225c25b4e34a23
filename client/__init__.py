"""Client module for RCON connections and transports."""

from client.connection import RconConnection, open_connection
from client.sequence import SequenceIdGenerator
from client.transport import StreamTransport, open_transport

__all__ = [
    'RconConnection',
    'open_connection',
    'SequenceIdGenerator',
    'StreamTransport',
    'open_transport',
]
