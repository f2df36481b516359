"""
Socket transport and connection lifecycle for MPD.

A Connection owns one local stream socket to the server plus the framer that
buffers what the server sends. It is created by `connect()`, which does not
return before the server's `OK MPD <version>` greeting has been read.

All I/O is blocking and strictly request/response: a line is written, then
the caller blocks until the full answer has been framed. No timeout is set
on the socket, so a server that stops answering blocks the caller. A
Connection is not safe to share between threads; open one per thread or
serialize access outside of it.
"""

from __future__ import annotations

import logging
import os
import socket
from types import TracebackType

from mpdkeys.protocol.errors import (
    MpdConnectionError,
    ProtocolError,
    TransportError,
)
from mpdkeys.protocol.framing import MAX_RESPONSE_SIZE, Response, ResponseFramer

logger = logging.getLogger(__name__)

GREETING_PREFIX = "OK MPD"

# Bytes requested per recv() call
RECV_SIZE = 4096


class Connection:
    """
    An open session with the server.

    Attributes:
        path: Filesystem path of the socket, for log messages.
    """

    def __init__(
        self,
        sock: socket.socket,
        path: str = "",
        max_response_size: int = MAX_RESPONSE_SIZE,
    ) -> None:
        """
        Wrap an already connected socket.

        Args:
            sock: Connected stream socket.
            path: Socket path the connection was made to.
            max_response_size: Buffer bound for a single response.
        """
        self._sock: socket.socket | None = sock
        self._framer = ResponseFramer(max_size=max_response_size)
        self.path = path

    def __enter__(self) -> "Connection":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._sock is None

    def close(self) -> None:
        """Close the socket. Safe to call more than once."""
        if self._sock is None:
            return
        try:
            self._sock.close()
        finally:
            self._sock = None
            logger.debug("Closed connection to %s", self.path or "MPD")

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise TransportError("Connection is closed")
        return self._sock

    def _receive(self) -> None:
        """Read one chunk from the socket into the framer."""
        sock = self._require_socket()
        try:
            data = sock.recv(RECV_SIZE)
        except OSError as e:
            raise TransportError(f"Failed to read from MPD: {e}") from e

        if not data:
            if self._framer.has_partial:
                raise ProtocolError("Connection closed in the middle of a response")
            raise TransportError("Connection closed by MPD")

        self._framer.feed(data)

    def read_line(self) -> str:
        """Block until one complete line has arrived and return it."""
        while True:
            line = self._framer.next_line()
            if line is not None:
                return line
            self._receive()

    def read_greeting(self) -> str:
        """
        Consume the server greeting.

        Returns:
            The protocol version announced by the server.

        Raises:
            MpdConnectionError: If no greeting arrives or it is not `OK MPD ...`.
        """
        try:
            line = self.read_line()
        except (TransportError, ProtocolError) as e:
            raise MpdConnectionError(f"No greeting from MPD: {e}") from e

        if not line.startswith(GREETING_PREFIX):
            raise MpdConnectionError(f"Could connect but MPD is not okay: {line!r}")

        return line[len(GREETING_PREFIX) :].strip()

    def send_line(self, text: str) -> None:
        """
        Write one command line.

        Raises:
            TransportError: If the connection is closed or the write fails.
        """
        sock = self._require_socket()
        logger.debug("-> %s", text)
        try:
            sock.sendall(f"{text}\n".encode("utf-8"))
        except OSError as e:
            raise TransportError(f"Failed to send {text!r} to MPD: {e}") from e

    def read_response(self) -> Response:
        """
        Block until one complete response has been framed.

        Raises:
            TransportError: On read failure or if the server hangs up between
                responses.
            ProtocolError: If the server hangs up mid-response or the response
                grows past the buffer bound without a terminator.
        """
        while True:
            response = self._framer.next_response()
            if response is not None:
                logger.debug("<- %s (%d field lines)", response.terminator, len(response.lines))
                return response
            self._receive()

    def command(self, text: str) -> Response:
        """Send a command line and return its framed response."""
        self.send_line(text)
        return self.read_response()


def _open_unix_socket(path: str) -> socket.socket:
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.connect(path)
    except OSError:
        sock.close()
        raise
    return sock


def connect(path: str | os.PathLike[str]) -> Connection:
    """
    Open a connection to the server's control socket.

    Args:
        path: Filesystem path of the MPD unix socket.

    Returns:
        A Connection whose greeting has been consumed, ready for commands.

    Raises:
        MpdConnectionError: If the socket cannot be reached or the greeting is
            missing or malformed.
    """
    path = os.fspath(path)

    try:
        sock = _open_unix_socket(path)
    except OSError as e:
        raise MpdConnectionError(f"Could not connect to socket {path}: {e}") from e

    connection = Connection(sock, path=path)
    try:
        version = connection.read_greeting()
    except MpdConnectionError:
        connection.close()
        raise

    logger.info("Connected to MPD %s at %s", version, path)
    return connection
