"""
Playback state and track metadata as reported by MPD.

These records are built fresh for every query and never cached. A record
constructed without arguments holds the documented defaults, so a field the
server did not send always has a well-defined value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

# Value stored for `single`/`consume` when the server reports "oneshot"
ONESHOT = 2


class PlaybackState(Enum):
    """Transport state of the server; values are the wire tokens."""

    STOPPED = "stop"
    PAUSED = "pause"
    PLAYING = "play"

    @classmethod
    def from_wire(cls, token: str) -> "PlaybackState | None":
        """Get the state for a `state:` token, or None if it is unknown."""
        try:
            return cls(token)
        except ValueError:
            return None


@dataclass
class StatusSnapshot:
    """Result of one `status` query."""

    volume: int = 100
    repeat: int = 0
    random: int = 0
    single: int = 0
    consume: int = 0
    partition: str = ""
    playlist: int = 0
    playlist_length: int = 0
    mixramp_db: float = 0.0
    state: PlaybackState = PlaybackState.STOPPED
    song: int = 0
    song_id: int = 0
    time: str = ""  # "elapsed:total" in whole seconds
    elapsed: float = 0.0
    bitrate: int = 0  # kbps
    duration: float = 0.0
    audio: str = ""  # "samplerate:bits:channels"
    next_song: int = 0
    next_song_id: int = 0


@dataclass
class TrackInfo:
    """Result of one `currentsong` query."""

    file: str = ""
    last_modified: str = ""
    artist: str = ""
    title: str = ""
    album: str = ""
    track: int = 0
    date: str = ""
    genre: str = ""
    time: int = 0  # whole seconds
    duration: float = 0.0
    pos: int = 0
    id: int = 0

    @property
    def display_name(self) -> str:
        """Artist and title the way they are shown to the user."""
        return f"{self.artist} - {self.title}"


class CommandResult(NamedTuple):
    """What a transport action hands back: a display line and the new state."""

    message: str
    state: PlaybackState
