"""Tests for packet serialization and stream decoding."""

import asyncio
import struct

import pytest

from protocol.constants import PACKET_OVERHEAD
from protocol.packet import Packet, read_packet, write_packet
from protocol.packet_types import PacketType, UnknownPacketType
from utils.exceptions import (
    MalformedPacketError,
    MalformedPayloadError,
    TransportError,
)


def test_serialize_layout():
    """Length, id, type, payload, then two null bytes."""
    data = Packet.create(7, PacketType.AUTH, "pw").serialize()
    assert data == struct.pack('<iii', 12, 7, 3) + b'pw\x00\x00'


def test_serialize_empty_payload():
    data = Packet.create(1, PacketType.EXEC_COMMAND, "").serialize()
    assert data == struct.pack('<iii', 10, 1, 2) + b'\x00\x00'


def test_length_counts_utf8_bytes():
    packet = Packet.create(0, PacketType.EXEC_COMMAND, "say héllo")
    assert packet.length == PACKET_OVERHEAD + len("say héllo".encode('utf-8'))
    assert packet.length == 20


def test_length_field_matches_remaining_bytes():
    for payload in ("", "status", "ünïcødé ✓", "x" * 4086):
        data = Packet.create(3, PacketType.EXEC_COMMAND, payload).serialize()
        (length,) = struct.unpack_from('<i', data)
        assert length == len(data) - 4
        assert length == 10 + len(payload.encode('utf-8'))


def test_unknown_type_serializes_its_code():
    data = Packet.create(1, UnknownPacketType(9), "").serialize()
    assert struct.unpack_from('<iii', data) == (10, 1, 9)


def test_unknown_type_code_must_fit_int32():
    with pytest.raises(ValueError):
        UnknownPacketType(2 ** 31)
    with pytest.raises(ValueError):
        UnknownPacketType(-(2 ** 31) - 1)


def test_serialize_rejects_out_of_range_id():
    with pytest.raises(ValueError):
        Packet.create(2 ** 31, PacketType.AUTH, "pw").serialize()


def test_is_error():
    assert Packet.create(-1, PacketType.AUTH_RESPONSE, "").is_error
    assert not Packet.create(0, PacketType.AUTH_RESPONSE, "").is_error
    assert not Packet.create(7, PacketType.AUTH_RESPONSE, "").is_error


@pytest.mark.asyncio
async def test_write_packet_writes_and_flushes(stream):
    packet = Packet.create(5, PacketType.EXEC_COMMAND, "status")
    await write_packet(stream, packet)
    assert bytes(stream.written) == packet.serialize()
    assert stream.flushes == 1


@pytest.mark.asyncio
async def test_write_packet_failure_is_transport_error(stream):
    stream.write_error = ConnectionResetError("reset by peer")
    with pytest.raises(TransportError) as exc_info:
        await write_packet(stream, Packet.create(0, PacketType.AUTH, "pw"))
    assert isinstance(exc_info.value.__cause__, ConnectionResetError)
    assert stream.flushes == 0


@pytest.mark.asyncio
async def test_round_trip_response_context(stream):
    original = Packet.create(12, PacketType.RESPONSE, "Players: 3")
    await write_packet(stream, original)
    stream.feed(bytes(stream.written))

    decoded = await read_packet(stream)
    assert decoded == original
    assert decoded.length == original.length


@pytest.mark.asyncio
async def test_round_trip_code_2_is_context_dependent(stream):
    data = Packet.create(4, PacketType.EXEC_COMMAND, "echo").serialize()

    stream.feed(data)
    assert (await read_packet(stream, response=False)).packet_type is PacketType.EXEC_COMMAND

    stream.feed(data)
    assert (await read_packet(stream, response=True)).packet_type is PacketType.AUTH_RESPONSE


@pytest.mark.asyncio
async def test_read_consumes_exactly_one_packet(stream, raw_packet):
    stream.feed(raw_packet(1, 0, b'first') + raw_packet(2, 0, b'second'))

    first = await read_packet(stream)
    assert first.id == 1
    assert first.payload == "first"
    assert bytes(stream.incoming) == raw_packet(2, 0, b'second')


@pytest.mark.asyncio
async def test_read_unknown_type(stream, raw_packet):
    stream.feed(raw_packet(1, 99, b''))
    packet = await read_packet(stream)
    assert packet.packet_type == UnknownPacketType(99)


@pytest.mark.asyncio
async def test_terminator_value_not_validated(stream, raw_packet):
    stream.feed(raw_packet(1, 0, b'ok', terminator=b'\xff\xff'))
    packet = await read_packet(stream)
    assert packet.payload == "ok"
    assert not stream.incoming


@pytest.mark.asyncio
async def test_malformed_utf8_payload(stream, raw_packet):
    stream.feed(raw_packet(1, 0, b'\xff\xfe\xfd') + raw_packet(2, 0, b'next'))

    with pytest.raises(MalformedPayloadError) as exc_info:
        await read_packet(stream)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    # The bad packet was consumed whole
    following = await read_packet(stream)
    assert following.id == 2
    assert following.payload == "next"


@pytest.mark.asyncio
async def test_declared_length_below_minimum(stream, raw_packet):
    """The frame is drained so the following packet can still be read."""
    stream.feed(struct.pack('<iii', 9, 1, 0) + b'\x00' + raw_packet(2, 0, b'next'))
    with pytest.raises(MalformedPayloadError):
        await read_packet(stream)

    following = await read_packet(stream)
    assert following.id == 2
    assert following.payload == "next"


@pytest.mark.asyncio
async def test_declared_length_shorter_than_header(stream):
    stream.feed(struct.pack('<iii', 4, 1, 0))
    with pytest.raises(MalformedPacketError) as exc_info:
        await read_packet(stream)
    assert not isinstance(exc_info.value, MalformedPayloadError)


@pytest.mark.asyncio
async def test_short_header_is_transport_error(stream):
    stream.feed(b'\x0a\x00\x00')
    with pytest.raises(TransportError) as exc_info:
        await read_packet(stream)
    assert isinstance(exc_info.value.__cause__, asyncio.IncompleteReadError)


@pytest.mark.asyncio
async def test_truncated_payload_is_transport_error(stream, raw_packet):
    stream.feed(raw_packet(1, 0, b'truncated')[:-5])
    with pytest.raises(TransportError):
        await read_packet(stream)


@pytest.mark.asyncio
async def test_missing_terminator_is_transport_error(stream, raw_packet):
    stream.feed(raw_packet(1, 0, b'abc')[:-2])
    with pytest.raises(TransportError):
        await read_packet(stream)
