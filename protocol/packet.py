"""RCON packet structure and stream codec.

Wire layout (all integers little-endian signed 32-bit)::

    +--------+--------+--------+-----------------+-----------+
    | length |   id   |  type  | payload (UTF-8) | 0x00 0x00 |
    +--------+--------+--------+-----------------+-----------+

``length`` counts every byte after itself: id + type + payload + terminator.
"""

from dataclasses import dataclass
import struct

from protocol.constants import (
    FRAME_HEADER_SIZE,
    HEADER_FORMAT,
    HEADER_SIZE,
    INT32_MAX,
    INT32_MIN,
    PACKET_OVERHEAD,
    TERMINATOR,
)
from protocol.encoding import decode_payload, encode_payload
from protocol.packet_types import AnyPacketType, PacketType
from protocol.stream import ByteStream
from utils.exceptions import (
    MalformedPacketError,
    MalformedPayloadError,
    TransportError,
)
from utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Packet:
    """A single RCON packet."""

    id: int
    packet_type: AnyPacketType
    payload: str

    @classmethod
    def create(cls, packet_id: int, packet_type: AnyPacketType, payload: str) -> 'Packet':
        """Build a packet; the length field is derived from the payload."""
        return cls(id=packet_id, packet_type=packet_type, payload=payload)

    @property
    def length(self) -> int:
        """Value of the length field: id + type + payload bytes + terminator."""
        return PACKET_OVERHEAD + len(encode_payload(self.payload))

    @property
    def is_error(self) -> bool:
        """Servers answer a failed authentication with id -1."""
        return self.id < 0

    def serialize(self) -> bytes:
        """
        Serialize the packet to its on-wire bytes.

        Returns:
            Header, payload and terminator as one bytes object

        Raises:
            ValueError: If the id does not fit in a signed 32-bit integer
        """
        if not INT32_MIN <= self.id <= INT32_MAX:
            raise ValueError(f"Packet id {self.id} does not fit in a signed 32-bit integer")

        body = encode_payload(self.payload)
        header = struct.pack(
            HEADER_FORMAT,
            PACKET_OVERHEAD + len(body),
            self.id,
            self.packet_type.code,
        )
        return header + body + TERMINATOR


async def write_packet(stream: ByteStream, packet: Packet) -> None:
    """
    Write a packet to the stream and flush it.

    No size validation is done here; callers check payload limits first.

    Raises:
        TransportError: If writing or flushing fails
    """
    data = packet.serialize()
    try:
        await stream.write_all(data)
        await stream.flush()
    except (EOFError, OSError) as e:
        raise TransportError(f"Failed to send packet {packet.id}: {e}") from e

    logger.debug(
        f"Sent packet id={packet.id} type={packet.packet_type} "
        f"length={packet.length}"
    )


async def read_packet(stream: ByteStream, response: bool = True) -> Packet:
    """
    Read one packet from the stream.

    Args:
        stream: Stream positioned at a packet boundary
        response: Interpret type code 2 as AUTH_RESPONSE (see PacketType.parse)

    Returns:
        The decoded packet

    Raises:
        TransportError: If the stream fails or ends before the packet is complete
        MalformedPayloadError: If the payload is not valid UTF-8 or the
            declared length leaves no room for the terminator; the frame
            has been consumed and the stream is still aligned
        MalformedPacketError: If the declared length does not even cover
            the id and type fields; the stream position is lost
    """
    try:
        header = await stream.read_exact(HEADER_SIZE)
        length, packet_id, type_code = struct.unpack(HEADER_FORMAT, header)

        if length < PACKET_OVERHEAD:
            if length < FRAME_HEADER_SIZE:
                # Id and type were read past the end of the frame
                raise MalformedPacketError(
                    f"Declared length {length} is shorter than id and type fields"
                )
            await stream.read_exact(length - FRAME_HEADER_SIZE)
            raise MalformedPayloadError(
                f"Declared length {length} is below minimum {PACKET_OVERHEAD}"
            )

        # Payload and terminator are consumed together so a bad payload
        # still leaves the stream on a packet boundary
        rest = await stream.read_exact(length - PACKET_OVERHEAD + len(TERMINATOR))
    except (EOFError, OSError) as e:
        raise TransportError(f"Failed to receive packet: {e}") from e

    payload = decode_payload(rest[:-len(TERMINATOR)])
    packet = Packet(
        id=packet_id,
        packet_type=PacketType.parse(type_code, response),
        payload=payload,
    )

    logger.debug(
        f"Received packet id={packet.id} type={packet.packet_type} "
        f"length={length}"
    )
    return packet
