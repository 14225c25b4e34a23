"""Shared fixtures: an in-memory ByteStream and raw packet builder."""

import asyncio
import struct

import pytest


class MockStream:
    """In-memory stream implementing read_exact/write_all/flush."""

    def __init__(self, data: bytes = b''):
        self.incoming = bytearray(data)
        self.written = bytearray()
        self.flushes = 0
        self.reads = 0
        self.write_error = None
        self.closed = False

    def feed(self, data: bytes) -> None:
        self.incoming.extend(data)

    async def read_exact(self, n: int) -> bytes:
        self.reads += 1
        if len(self.incoming) < n:
            partial = bytes(self.incoming)
            self.incoming.clear()
            raise asyncio.IncompleteReadError(partial, n)
        chunk = bytes(self.incoming[:n])
        del self.incoming[:n]
        return chunk

    async def write_all(self, data: bytes) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.written.extend(data)

    async def flush(self) -> None:
        self.flushes += 1

    async def close(self) -> None:
        self.closed = True


def build_raw_packet(packet_id: int, type_code: int, payload: bytes,
                     terminator: bytes = b'\x00\x00') -> bytes:
    """Frame raw payload bytes the way a server would."""
    return struct.pack('<iii', 10 + len(payload), packet_id, type_code) + payload + terminator


@pytest.fixture
def stream():
    return MockStream()


@pytest.fixture
def raw_packet():
    return build_raw_packet
