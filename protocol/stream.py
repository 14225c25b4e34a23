"""Byte stream capabilities required by the packet codec."""

from typing import Protocol


class ByteStream(Protocol):
    """
    Ordered, reliable duplex byte stream.

    Any object providing these coroutines can carry RCON packets;
    how the stream is established (TCP, TLS, in-memory) does not matter.
    """

    async def read_exact(self, n: int) -> bytes:
        """Read exactly n bytes, failing if the stream ends first."""
        ...

    async def write_all(self, data: bytes) -> None:
        """Queue all of data for sending."""
        ...

    async def flush(self) -> None:
        """Wait until queued data has been handed to the peer."""
        ...
