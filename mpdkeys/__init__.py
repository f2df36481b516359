"""
mpdkeys - media key control for the Music Player Daemon.

mpdkeys talks to a local MPD over its unix control socket and performs the
actions behind keyboard media keys (next, previous, stop, play/pause). Each
action answers with the now playing "<artist> - <title>" line and the
resulting playback state, ready for the console or a desktop notification.
"""

__version__ = "0.1.0"
__author__ = "mpdkeys Contributors"
__license__ = "GPL-3.0"

from mpdkeys.player.status import CommandResult, PlaybackState, StatusSnapshot, TrackInfo
from mpdkeys.protocol.commands import MpdController
from mpdkeys.protocol.connection import Connection, connect
from mpdkeys.protocol.errors import MpdError

__all__ = [
    "CommandResult",
    "Connection",
    "MpdController",
    "MpdError",
    "PlaybackState",
    "StatusSnapshot",
    "TrackInfo",
    "__version__",
    "connect",
]
