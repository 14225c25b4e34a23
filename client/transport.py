"""asyncio stream adapter implementing the ByteStream capabilities."""

import asyncio

from utils.logging import get_logger

logger = get_logger(__name__)


class StreamTransport:
    """
    Wrapper around an asyncio StreamReader/StreamWriter pair.
    
    Provides the read_exact/write_all/flush interface the packet codec
    expects. Errors from the underlying streams propagate unchanged;
    the codec turns them into TransportError.
    """
    
    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """
        Initialize StreamTransport wrapper.
        
        Args:
            reader: Stream to read replies from
            writer: Stream to write requests to
        """
        self.reader = reader
        self.writer = writer
    
    async def read_exact(self, n: int) -> bytes:
        """
        Read exactly n bytes.
        
        Raises:
            asyncio.IncompleteReadError: If the peer closes the stream first
        """
        return await self.reader.readexactly(n)
    
    async def write_all(self, data: bytes) -> None:
        """Buffer data for sending."""
        self.writer.write(data)
    
    async def flush(self) -> None:
        """Wait until the write buffer has drained."""
        await self.writer.drain()
    
    async def close(self) -> None:
        """Close the underlying connection."""
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except OSError:
            # Connection may already be reset by the peer
            logger.debug("Connection already closed", exc_info=True)


async def open_transport(host: str, port: int) -> StreamTransport:
    """
    Open a TCP connection to an RCON server.
    
    Args:
        host: Server hostname or IP address
        port: Server port
        
    Returns:
        Connected StreamTransport
        
    Raises:
        OSError: If the connection cannot be established
    """
    logger.info(f"Connecting to {host}:{port}")
    reader, writer = await asyncio.open_connection(host, port)
    logger.info(f"Connected to {host}:{port}")
    return StreamTransport(reader, writer)
