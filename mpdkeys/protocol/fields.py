"""
Field parsing for `status` and `currentsong` responses.

Both parsers are table driven: each recognized key names the record attribute
it fills and the converter for its value. Keys the table does not know are
skipped, so newer servers can add fields freely. A value that does not
convert aborts the whole record with ParseError.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from mpdkeys.player.status import ONESHOT, PlaybackState, StatusSnapshot, TrackInfo
from mpdkeys.protocol.errors import ParseError
from mpdkeys.protocol.framing import Response

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", StatusSnapshot, TrackInfo)

# key -> (attribute, converter, type name used in errors)
FieldTable = dict[str, tuple[str, Callable[[str], Any], str]]


def _to_str(value: str) -> str:
    return value


def _to_mode_flag(value: str) -> int:
    """`single`/`consume` are 0/1, or "oneshot" on newer servers."""
    if value == "oneshot":
        return ONESHOT
    return int(value)


def _to_track_number(value: str) -> int:
    # Track tags are often written as "3/12"
    return int(value.split("/", 1)[0])


def _to_state(value: str) -> PlaybackState | None:
    return PlaybackState.from_wire(value)


STATUS_FIELDS: FieldTable = {
    "volume": ("volume", int, "int"),
    "repeat": ("repeat", int, "int"),
    "random": ("random", int, "int"),
    "single": ("single", _to_mode_flag, "int"),
    "consume": ("consume", _to_mode_flag, "int"),
    "partition": ("partition", _to_str, "str"),
    "playlist": ("playlist", int, "int"),
    "playlistlength": ("playlist_length", int, "int"),
    "mixrampdb": ("mixramp_db", float, "float"),
    "state": ("state", _to_state, "state"),
    "song": ("song", int, "int"),
    "songid": ("song_id", int, "int"),
    "time": ("time", _to_str, "str"),
    "elapsed": ("elapsed", float, "float"),
    "bitrate": ("bitrate", int, "int"),
    "duration": ("duration", float, "float"),
    "audio": ("audio", _to_str, "str"),
    "nextsong": ("next_song", int, "int"),
    "nextsongid": ("next_song_id", int, "int"),
}

TRACK_FIELDS: FieldTable = {
    "file": ("file", _to_str, "str"),
    "Last-Modified": ("last_modified", _to_str, "str"),
    "Artist": ("artist", _to_str, "str"),
    "Title": ("title", _to_str, "str"),
    "Album": ("album", _to_str, "str"),
    "Track": ("track", _to_track_number, "int"),
    "Date": ("date", _to_str, "str"),
    "Genre": ("genre", _to_str, "str"),
    "Time": ("time", int, "int"),
    "duration": ("duration", float, "float"),
    "Pos": ("pos", int, "int"),
    "Id": ("id", int, "int"),
}


def parse_fields(
    record: RecordT,
    fields: Iterable[tuple[str, str]],
    table: FieldTable,
) -> RecordT:
    """
    Fill a record from (key, value) pairs according to a field table.

    Args:
        record: Freshly constructed record holding the defaults.
        fields: Pairs as produced by `split_field`.
        table: Mapping of recognized keys to attribute and converter.

    Returns:
        The same record, updated.

    Raises:
        ParseError: If a recognized value cannot be converted.
    """
    for key, value in fields:
        entry = table.get(key)
        if entry is None:
            continue

        attribute, convert, expected = entry
        try:
            converted = convert(value)
        except ValueError as e:
            raise ParseError(key, value, expected) from e

        if converted is None:
            # Unknown enum token: keep whatever the record already holds
            logger.debug("Ignoring unknown %s value %r", key, value)
            continue

        setattr(record, attribute, converted)

    return record


def parse_status(response: Response) -> StatusSnapshot:
    """Build a StatusSnapshot from a framed `status` response."""
    return parse_fields(StatusSnapshot(), response.fields(), STATUS_FIELDS)


def parse_track(response: Response) -> TrackInfo:
    """Build a TrackInfo from a framed `currentsong` response."""
    return parse_fields(TrackInfo(), response.fields(), TRACK_FIELDS)
