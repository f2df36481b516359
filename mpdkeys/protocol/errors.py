"""
Exceptions raised by the MPD protocol layer.

Every failure mode of a session maps onto one class below, so callers can
decide per kind whether to print, notify or give up. None of them ends the
process on its own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mpdkeys.protocol.framing import AckError


class MpdError(Exception):
    """Base exception for everything the protocol layer raises."""


class MpdConnectionError(MpdError, ConnectionError):
    """The socket could not be reached or the server greeting was wrong."""


class TransportError(MpdError):
    """Reading from or writing to an established connection failed."""


class ProtocolError(MpdError):
    """The server sent something that is not a valid response."""


class ParseError(MpdError, ValueError):
    """A field value could not be converted to its declared type."""

    def __init__(self, key: str, value: str, expected: str) -> None:
        super().__init__(f"Cannot parse {key!r} value {value!r} as {expected}")
        self.key = key
        self.value = value
        self.expected = expected


class CommandError(MpdError):
    """The server answered a query with an ACK."""

    def __init__(self, ack: "AckError") -> None:
        super().__init__(f"{ack.command}: {ack.message}")
        self.ack = ack
