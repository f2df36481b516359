"""
Transport actions on top of a Connection.

Each action sends one command, then asks the server what happened: on
success the reply is the new current track as "<artist> - <title>", on an
ACK it is the server's error message. Either way the caller also gets the
playback state from a fresh `status` query. Nothing is cached between calls.
"""

from __future__ import annotations

import logging

from mpdkeys.player.status import CommandResult, PlaybackState, StatusSnapshot, TrackInfo
from mpdkeys.protocol.connection import Connection
from mpdkeys.protocol.errors import CommandError, ProtocolError
from mpdkeys.protocol.fields import parse_status, parse_track
from mpdkeys.protocol.framing import Response

logger = logging.getLogger(__name__)

CMD_STATUS = "status"
CMD_CURRENTSONG = "currentsong"
CMD_NEXT = "next"
CMD_PREVIOUS = "previous"
CMD_STOP = "stop"
CMD_PLAY = "play"
CMD_PAUSE = "pause"

# `pause` without argument flips between playing and paused;
# only `play` gets a stopped server going again.
TOGGLE_COMMANDS: dict[PlaybackState, str] = {
    PlaybackState.STOPPED: CMD_PLAY,
    PlaybackState.PAUSED: CMD_PAUSE,
    PlaybackState.PLAYING: CMD_PAUSE,
}


def toggle_command(state: PlaybackState) -> str:
    """Return the command that toggles play/pause from the given state."""
    return TOGGLE_COMMANDS[state]


class MpdController:
    """
    Media-key style control of one MPD server.

    Every method does blocking round trips on the wrapped connection and
    returns only after all of them have completed.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def _query(self, command: str) -> Response:
        response = self.connection.command(command)
        if response.is_ack:
            raise CommandError(response.ack())
        return response

    def status(self) -> StatusSnapshot:
        """Fetch a fresh status snapshot."""
        return parse_status(self._query(CMD_STATUS))

    def current_song(self) -> TrackInfo:
        """Fetch metadata of the current song (all defaults if there is none)."""
        return parse_track(self._query(CMD_CURRENTSONG))

    def run_command(self, command: str) -> CommandResult:
        """
        Send a transport command and describe its outcome.

        Args:
            command: Command name, sent as a line on its own.

        Returns:
            CommandResult with either "<artist> - <title>" of the now current
            track or the ACK message, plus the state after the command.

        Raises:
            ProtocolError: If the response or its ACK line is malformed.
        """
        response = self.connection.command(command)

        if response.is_ack:
            ack = response.ack()
            logger.debug("MPD refused %s: [%d] %s", command, ack.code, ack.message)
            return CommandResult(ack.message, self.status().state)

        if response.is_ok:
            track = self.current_song()
            return CommandResult(track.display_name, self.status().state)

        raise ProtocolError(f"Unrecognized server response to {command!r}: {response.terminator!r}")

    def next(self) -> CommandResult:
        """Skip to the next song in the playlist."""
        return self.run_command(CMD_NEXT)

    def previous(self) -> CommandResult:
        """Go back to the previous song in the playlist."""
        return self.run_command(CMD_PREVIOUS)

    def stop(self) -> CommandResult:
        """Stop playback."""
        return self.run_command(CMD_STOP)

    def toggle(self) -> CommandResult:
        """
        Do what a combined play/pause key should do.

        Starts playback when stopped, otherwise pauses or resumes. Costs one
        extra status round trip to pick the command.
        """
        state = self.status().state
        command = toggle_command(state)
        logger.debug("Toggle from %s sends %s", state.name, command)
        return self.run_command(command)
