"""
Player-side data for mpdkeys.

This package holds the records the protocol layer fills in from server
responses: the playback state, the status snapshot and the current track.
"""

from mpdkeys.player.status import (
    CommandResult,
    PlaybackState,
    StatusSnapshot,
    TrackInfo,
)

__all__ = [
    "CommandResult",
    "PlaybackState",
    "StatusSnapshot",
    "TrackInfo",
]
