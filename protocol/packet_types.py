"""RCON packet type definitions."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from protocol.constants import INT32_MAX, INT32_MIN


class PacketType(Enum):
    """Known RCON packet types.

    The wire code 2 is shared by EXEC_COMMAND (requests) and AUTH_RESPONSE
    (replies), so members are not keyed by their code.
    """

    AUTH = 'auth'
    AUTH_RESPONSE = 'auth_response'
    EXEC_COMMAND = 'exec_command'
    RESPONSE = 'response'

    @property
    def code(self) -> int:
        """Integer written on the wire for this type."""
        return _TYPE_CODES[self]

    @classmethod
    def parse(cls, code: int, response: bool = True) -> 'AnyPacketType':
        """
        Interpret a wire type code.

        Args:
            code: Raw type code read from the wire
            response: Whether code 2 should be read as AUTH_RESPONSE
                (awaiting an authentication reply) rather than EXEC_COMMAND

        Returns:
            The matching PacketType, or UnknownPacketType for any other code
        """
        if code == 3:
            return cls.AUTH
        if code == 2:
            return cls.AUTH_RESPONSE if response else cls.EXEC_COMMAND
        if code == 0:
            return cls.RESPONSE
        return UnknownPacketType(code)


@dataclass(frozen=True)
class UnknownPacketType:
    """A type code outside the known set, kept as-is."""

    code: int

    def __post_init__(self) -> None:
        if not INT32_MIN <= self.code <= INT32_MAX:
            raise ValueError(f"Packet type code {self.code} does not fit in a signed 32-bit integer")


AnyPacketType = Union[PacketType, UnknownPacketType]

_TYPE_CODES = {
    PacketType.AUTH: 3,
    PacketType.AUTH_RESPONSE: 2,
    PacketType.EXEC_COMMAND: 2,
    PacketType.RESPONSE: 0,
}
