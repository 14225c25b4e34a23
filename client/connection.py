"""RCON connection handling authentication and command execution."""

from typing import List, Optional

from client.sequence import SequenceIdGenerator
from client.transport import open_transport
from config.settings import ConnectionConfig
from protocol.encoding import payload_size
from protocol.packet import Packet, read_packet, write_packet
from protocol.packet_types import AnyPacketType, PacketType
from protocol.stream import ByteStream
from utils.logging import get_logger
from utils.exceptions import (
    AuthenticationError,
    MalformedPayloadError,
    PayloadTooLargeError,
)

logger = get_logger(__name__)


class RconConnection:
    """
    A connection to an RCON server over any ByteStream.

    Only one request may be outstanding at a time. The connection does
    no locking; callers sharing it between tasks must serialize access
    themselves. There are no timeouts or retries: wrap calls in
    asyncio.wait_for if a stalled server must not block forever.

    Usage::

        connection = await open_connection("127.0.0.1", 27015)
        await connection.authenticate("password")
        lines = await connection.execute_command("status")
    """

    def __init__(self, stream: ByteStream, config: Optional[ConnectionConfig] = None):
        """
        Initialize a connection over an already established stream.

        Args:
            stream: Transport carrying the packets; stays owned by the caller
            config: Protocol settings (default: ConnectionConfig())
        """
        self._stream = stream
        self._config = config or ConnectionConfig()
        self._config.validate()
        self._ids = SequenceIdGenerator(self._config.default_packet_id)

    @property
    def stream(self) -> ByteStream:
        """The underlying transport."""
        return self._stream

    @property
    def config(self) -> ConnectionConfig:
        """Settings this connection was created with."""
        return self._config

    async def authenticate(self, password: str) -> None:
        """
        Authenticate with the server.

        Reply packets that are not an authentication response (servers
        usually send an empty RESPONSE first) are skipped, as are packets
        whose payload cannot be decoded.

        Args:
            password: RCON password

        Raises:
            PayloadTooLargeError: If the password exceeds max_payload_size
            AuthenticationError: If the server rejects the password
            TransportError: If the stream fails while waiting for the reply
            MalformedPacketError: If a reply cannot be framed and the stream
                position is lost
        """
        self._check_payload_size(password)

        await self.send(PacketType.AUTH, password)

        while True:
            try:
                packet = await read_packet(self._stream, response=True)
            except MalformedPayloadError as e:
                logger.debug(f"Skipping undecodable packet during authentication: {e}")
                continue

            if packet.packet_type == PacketType.AUTH_RESPONSE:
                break

            logger.debug(
                f"Skipping packet id={packet.id} type={packet.packet_type} "
                f"while waiting for authentication response"
            )

        if packet.is_error:
            logger.warning("Authentication failed: server rejected the password")
            raise AuthenticationError("authentication failed")

        logger.info("Authenticated successfully")

    async def execute_command(self, command: str) -> List[str]:
        """
        Execute a command on the server.

        Args:
            command: Command line to run

        Returns:
            Response payloads in arrival order. In multiple-responses mode
            the list ends with the empty payload that terminated it.

        Raises:
            PayloadTooLargeError: If the command exceeds max_payload_size;
                nothing is sent in that case
            TransportError: If the stream fails
            MalformedPayloadError: If a response is not valid UTF-8
        """
        self._check_payload_size(command)

        await self.send(PacketType.EXEC_COMMAND, command)

        responses = await self.receive()
        logger.debug(f"Command returned {len(responses)} response packet(s)")
        return responses

    async def send(self, packet_type: AnyPacketType, payload: str) -> None:
        """
        Send a payload to the server using the next sequence id.

        Args:
            packet_type: Type of the packet to send
            payload: Packet payload text

        Raises:
            TransportError: If writing to the stream fails
        """
        packet = Packet.create(self._ids.next_id(), packet_type, payload)
        await write_packet(self._stream, packet)

    async def receive(self) -> List[str]:
        """Receive payload(s) according to the multiple_responses setting."""
        if self._config.multiple_responses:
            return await self.receive_multi_response()

        response = await self.receive_single_response()
        return [response]

    async def receive_multi_response(self) -> List[str]:
        """
        Receive payloads until an empty one arrives.

        Servers split long output over several packets; the empty packet
        marking the end is included in the result.
        """
        responses = []

        while True:
            response = await self.receive_single_response()
            responses.append(response)

            if not response:
                break

        return responses

    async def receive_single_response(self) -> str:
        """Receive a single payload from the server."""
        packet = await read_packet(self._stream, response=False)
        return packet.payload

    def _check_payload_size(self, payload: str) -> None:
        """
        Raises:
            PayloadTooLargeError: If payload exceeds max_payload_size
        """
        size = payload_size(payload)
        if size > self._config.max_payload_size:
            raise PayloadTooLargeError(
                f"Payload size {size} exceeds limit {self._config.max_payload_size}"
            )


async def open_connection(
    host: str,
    port: int,
    config: Optional[ConnectionConfig] = None,
) -> RconConnection:
    """
    Connect to an RCON server over TCP.

    Args:
        host: Server hostname or IP address
        port: Server port
        config: Protocol settings (default: ConnectionConfig())

    Returns:
        Unauthenticated RconConnection; close it with
        ``await connection.stream.close()``
    """
    transport = await open_transport(host, port)
    return RconConnection(transport, config)
