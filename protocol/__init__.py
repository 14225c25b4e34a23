"""Protocol module for RCON packet types, encoding, and framing."""

from protocol.constants import (
    DEFAULT_MAX_PAYLOAD_SIZE,
    DEFAULT_PACKET_ID,
    DEFAULT_PORT,
    HEADER_FORMAT,
    HEADER_SIZE,
    PACKET_OVERHEAD,
    TERMINATOR,
)
from protocol.packet_types import PacketType, UnknownPacketType
from protocol.encoding import encode_payload, decode_payload, payload_size
from protocol.stream import ByteStream
from protocol.packet import Packet, read_packet, write_packet

__all__ = [
    'DEFAULT_MAX_PAYLOAD_SIZE',
    'DEFAULT_PACKET_ID',
    'DEFAULT_PORT',
    'HEADER_FORMAT',
    'HEADER_SIZE',
    'PACKET_OVERHEAD',
    'TERMINATOR',
    'PacketType',
    'UnknownPacketType',
    'encode_payload',
    'decode_payload',
    'payload_size',
    'ByteStream',
    'Packet',
    'read_packet',
    'write_packet',
]
