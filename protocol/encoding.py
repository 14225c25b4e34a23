"""Payload text encoding and decoding functions."""

from utils.exceptions import MalformedPayloadError

PAYLOAD_ENCODING = 'utf-8'


def encode_payload(text: str) -> bytes:
    """Encode payload text to the bytes sent on the wire."""
    return text.encode(PAYLOAD_ENCODING)


def decode_payload(data: bytes) -> str:
    """
    Decode payload bytes received from the server.

    Raises:
        MalformedPayloadError: If the bytes are not valid UTF-8
    """
    try:
        return data.decode(PAYLOAD_ENCODING)
    except UnicodeDecodeError as e:
        raise MalformedPayloadError(f"Invalid UTF-8 payload: {e}") from e


def payload_size(text: str) -> int:
    """Number of bytes the text occupies on the wire."""
    return len(encode_payload(text))
