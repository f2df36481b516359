"""
Shared test helpers: a scripted stand-in for the MPD unix socket.
"""

from collections.abc import Callable

import pytest

from mpdkeys.protocol.connection import Connection

STATUS_PLAYING = (
    b"volume: 80\n"
    b"repeat: 0\n"
    b"random: 1\n"
    b"single: 0\n"
    b"consume: 0\n"
    b"partition: default\n"
    b"playlist: 12\n"
    b"playlistlength: 34\n"
    b"mixrampdb: 0.000000\n"
    b"state: play\n"
    b"song: 5\n"
    b"songid: 6\n"
    b"time: 95:240\n"
    b"elapsed: 94.912\n"
    b"bitrate: 320\n"
    b"duration: 240.123\n"
    b"audio: 44100:24:2\n"
    b"nextsong: 6\n"
    b"nextsongid: 7\n"
    b"OK\n"
)

CURRENTSONG = (
    b"file: Radiohead/OK Computer/02 Paranoid Android.flac\n"
    b"Last-Modified: 2021-03-14T09:26:53Z\n"
    b"Artist: Radiohead\n"
    b"Title: Paranoid Android\n"
    b"Album: OK Computer\n"
    b"Track: 2/12\n"
    b"Date: 1997-05-21\n"
    b"Genre: Alternative\n"
    b"Time: 387\n"
    b"duration: 386.733\n"
    b"Pos: 5\n"
    b"Id: 6\n"
    b"OK\n"
)


def status_with_state(state: str) -> bytes:
    """A minimal status response reporting the given state token."""
    return f"volume: 50\nstate: {state}\nOK\n".encode()


class FakeSocket:
    """
    Socket double that hands out scripted bytes from recv().

    Each scripted item is returned by one recv() call (split further if it
    exceeds the requested size). Exceptions in the script are raised
    instead. An exhausted script reads as EOF.
    """

    def __init__(self, script: list[bytes | Exception] | None = None) -> None:
        self.script: list[bytes | Exception] = list(script or [])
        self.sent = bytearray()
        self.send_error: Exception | None = None
        self.closed = False

    def recv(self, bufsize: int) -> bytes:
        if not self.script:
            return b""
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        if len(item) > bufsize:
            self.script.insert(0, item[bufsize:])
            item = item[:bufsize]
        return item

    def sendall(self, data: bytes) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent.extend(data)

    def close(self) -> None:
        self.closed = True

    @property
    def sent_lines(self) -> list[str]:
        return self.sent.decode("utf-8").splitlines()


def chunked(data: bytes, size: int) -> list[bytes]:
    """Split data into pieces of at most `size` bytes."""
    return [data[i : i + size] for i in range(0, len(data), size)]


@pytest.fixture
def make_connection() -> Callable[..., tuple[Connection, FakeSocket]]:
    """Factory for a Connection over a FakeSocket replaying the given responses."""

    def _make(*responses: bytes, chunk_size: int | None = None) -> tuple[Connection, FakeSocket]:
        stream = b"".join(responses)
        script: list[bytes | Exception] = chunked(stream, chunk_size) if chunk_size else [stream]
        sock = FakeSocket(script)
        return Connection(sock, path="/tmp/mpd.sock"), sock  # type: ignore[arg-type]

    return _make
