"""
MPD protocol implementation for mpdkeys.

This package contains the client side of the MPD text protocol:
- connection: the unix socket transport and greeting handshake
- framing: splitting the byte stream into OK/ACK terminated responses
- fields: turning response lines into status and track records
- commands: transport actions and the play/pause toggle
"""

from mpdkeys.protocol.commands import MpdController, toggle_command
from mpdkeys.protocol.connection import Connection, connect
from mpdkeys.protocol.errors import (
    CommandError,
    MpdConnectionError,
    MpdError,
    ParseError,
    ProtocolError,
    TransportError,
)

__all__ = [
    "CommandError",
    "Connection",
    "MpdConnectionError",
    "MpdController",
    "MpdError",
    "ParseError",
    "ProtocolError",
    "TransportError",
    "connect",
    "toggle_command",
]
