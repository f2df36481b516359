"""
Response framing for the MPD text protocol.

Every answer from the server is a run of `key: value` lines closed by exactly
one terminator line:

    volume: 80
    state: play
    OK

or, when the command failed, by a single error line:

    ACK [<code>@<index>] {<command>} <message>

The socket may deliver a response in any number of pieces, so the framer
accumulates bytes until it has seen a complete terminator line and only then
hands out a `Response`. A response that keeps growing without a terminator is
cut off at `MAX_RESPONSE_SIZE`.

Reference: https://mpd.readthedocs.io/en/latest/protocol.html#responses
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

from mpdkeys.protocol.errors import ProtocolError

OK_LINE = "OK"
ACK_PREFIX = "ACK"

# Upper bound on buffered bytes while waiting for a terminator
MAX_RESPONSE_SIZE = 1024 * 1024

_ACK_HEADER = re.compile(r"ACK \[(\d+)@(\d+)\] ")


class AckCode(IntEnum):
    """Error numbers the server puts in the `[<code>@<index>]` part of an ACK."""

    NOT_LIST = 1  # Command list misuse
    ARG = 2  # Bad argument
    PASSWORD = 3  # Wrong password
    PERMISSION = 4  # Not allowed without a password
    UNKNOWN = 5  # Unknown command / generic failure
    NO_EXIST = 50  # No such song, playlist, ...
    PLAYLIST_MAX = 51
    SYSTEM = 52
    PLAYLIST_LOAD = 53
    UPDATE_ALREADY = 54
    PLAYER_SYNC = 55
    EXIST = 56


@dataclass(frozen=True)
class AckError:
    """Decoded ACK line."""

    code: int
    index: int
    command: str
    message: str

    @property
    def error_code(self) -> AckCode | None:
        """The code as an AckCode, or None if the server used an unlisted number."""
        try:
            return AckCode(self.code)
        except ValueError:
            return None


def split_field(line: str) -> tuple[str, str]:
    """
    Split a response line into key and value.

    Only the first colon separates, so values such as `time: 12:300` or
    URLs survive intact. A line without any colon gives `("", "")`.
    """
    key, sep, value = line.partition(":")
    if not sep:
        return "", ""
    return key.strip(), value.strip()


def parse_ack(line: str) -> AckError:
    """
    Decode an ACK terminator line.

    The message is whatever follows the first `}` after the opening `{` of
    the command bracket, minus the one separating character. A message that
    itself contains `}` is therefore only safe after the real delimiter.

    Args:
        line: A complete ACK line, with or without its trailing newline.

    Returns:
        The decoded AckError.

    Raises:
        ProtocolError: If the line does not have the ACK shape.
    """
    line = line.rstrip("\n")

    header = _ACK_HEADER.match(line)
    if header is None:
        raise ProtocolError(f"Malformed ACK line (no [code@index]): {line!r}")

    open_brace = line.find("{", header.end())
    if open_brace < 0:
        raise ProtocolError(f"Malformed ACK line (no opening brace): {line!r}")

    close_brace = line.find("}", open_brace)
    if close_brace < 0:
        raise ProtocolError(f"Malformed ACK line (no closing brace): {line!r}")

    return AckError(
        code=int(header.group(1)),
        index=int(header.group(2)),
        command=line[open_brace + 1 : close_brace],
        message=line[close_brace + 2 :],
    )


@dataclass(frozen=True)
class Response:
    """One framed server response: its field lines plus the terminator line."""

    lines: tuple[str, ...]
    terminator: str

    @property
    def is_ok(self) -> bool:
        return self.terminator == OK_LINE

    @property
    def is_ack(self) -> bool:
        return self.terminator.startswith(ACK_PREFIX)

    def ack(self) -> AckError:
        """Decode the terminator as an ACK line."""
        return parse_ack(self.terminator)

    def fields(self) -> list[tuple[str, str]]:
        """All field lines split into (key, value) pairs, in server order."""
        return [split_field(line) for line in self.lines]


class ResponseFramer:
    """
    Incremental framer for the byte stream coming from the server.

    Feed it whatever `recv()` returned; pull complete lines (for the
    greeting) or complete responses out of it. Bytes belonging to a later
    response stay buffered.
    """

    def __init__(self, max_size: int = MAX_RESPONSE_SIZE) -> None:
        self.max_size = max_size
        self._buffer = bytearray()
        self._lines: list[str] = []
        self._pending_size = 0

    @property
    def has_partial(self) -> bool:
        """True while part of a response has been received but not framed."""
        return bool(self._buffer) or bool(self._lines)

    def feed(self, data: bytes) -> None:
        """Append received bytes to the buffer."""
        self._buffer.extend(data)

    def next_line(self) -> str | None:
        """
        Pop one complete line (without newline), or None if none is buffered.

        Raises:
            ProtocolError: If more than `max_size` bytes arrived without a newline.
        """
        end = self._buffer.find(b"\n")
        if end < 0:
            if len(self._buffer) > self.max_size:
                raise ProtocolError(f"No line terminator within {self.max_size} bytes")
            return None
        raw = bytes(self._buffer[:end])
        del self._buffer[: end + 1]
        return raw.decode("utf-8", errors="replace")

    def next_response(self) -> Response | None:
        """
        Pop one complete response, or None if its terminator has not arrived.

        Raises:
            ProtocolError: If more than `max_size` bytes are buffered without
                a terminator line.
        """
        while True:
            line = self.next_line()
            if line is None:
                break

            if line == OK_LINE or line.startswith(ACK_PREFIX):
                response = Response(lines=tuple(self._lines), terminator=line)
                self._lines = []
                self._pending_size = 0
                return response

            self._lines.append(line)
            self._pending_size += len(line) + 1

        if self._pending_size + len(self._buffer) > self.max_size:
            raise ProtocolError(
                f"No OK/ACK terminator within {self.max_size} bytes of response data"
            )
        return None


def frame_response(data: bytes | str) -> Response:
    """
    Frame the first response contained in a complete chunk of server output.

    Raises:
        ProtocolError: If the data does not end a response with an `OK` or
            `ACK` line.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    framer = ResponseFramer()
    framer.feed(data)
    response = framer.next_response()
    if response is None:
        raise ProtocolError("Unrecognized server response: no OK or ACK terminator")
    return response
