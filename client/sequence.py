"""Sequence id generation for outgoing packets."""

from protocol.constants import INT32_MAX


class SequenceIdGenerator:
    """
    Hands out packet ids in increasing order, starting at 0.
    
    When the next increment would leave the signed 32-bit range, the
    counter restarts at the default id instead of wrapping around.
    """
    
    def __init__(self, default_id: int = 0, start: int = 0):
        self._default_id = default_id
        self._current_id = start
    
    @property
    def current_id(self) -> int:
        """Id that the next call to next_id() will return."""
        return self._current_id
    
    def next_id(self) -> int:
        packet_id = self._current_id
        if packet_id >= INT32_MAX:
            self._current_id = self._default_id
        else:
            self._current_id = packet_id + 1
        return packet_id
