"""Protocol constants for RCON packet framing.

These are protocol-level constants that should not be changed
without breaking compatibility with RCON servers.
"""

import struct

# Header format: little-endian int (length) + int (id) + int (type)
# Format: '<' = little-endian, 'i' = signed int (4 bytes)
HEADER_FORMAT = '<iii'

# Size of the full header in bytes (length + id + type)
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)

# Size of the length prefix; the declared length counts everything after it
LENGTH_PREFIX_SIZE = struct.calcsize('<i')

# Id and type fields, the part of the header counted by the length field
FRAME_HEADER_SIZE = HEADER_SIZE - LENGTH_PREFIX_SIZE

# Double-null terminator closing every packet
TERMINATOR = b'\x00\x00'

# Bytes counted by the length field besides the payload:
# id (4) + type (4) + terminator (2)
PACKET_OVERHEAD = FRAME_HEADER_SIZE + len(TERMINATOR)

# Conventional 4 KiB frame minus the overhead
DEFAULT_MAX_PAYLOAD_SIZE = 4096 - PACKET_OVERHEAD

DEFAULT_PACKET_ID = 0

DEFAULT_PORT = 27015

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
