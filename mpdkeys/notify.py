"""
Desktop notifications for action results.

Notifications go through the freedesktop `notify-send` tool, which talks to
whatever notification daemon (dunst, mako, GNOME Shell, ...) is running.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from mpdkeys.player.status import PlaybackState

logger = logging.getLogger(__name__)

NOTIFY_SEND = "notify-send"
NOTIFY_CATEGORY = "mpd"

ICON_NEXT = "media-skip-forward-symbolic.svg"
ICON_PREV = "media-skip-backward-symbolic.svg"
ICON_STOP = "media-playback-stop.svg"
ICON_PLAY = "media-playback-start-symbolic.svg"
ICON_PAUSE = "media-playback-pause-symbolic.svg"

ACTION_ICONS: dict[str, str] = {
    "next": ICON_NEXT,
    "prev": ICON_PREV,
    "stop": ICON_STOP,
}

STATE_ICONS: dict[PlaybackState, str] = {
    PlaybackState.STOPPED: ICON_STOP,
    PlaybackState.PAUSED: ICON_PAUSE,
    PlaybackState.PLAYING: ICON_PLAY,
}


class NotificationError(Exception):
    """A notification could not be shown."""


def icon_for(action: str, state: PlaybackState, icon_dir: Path) -> Path:
    """
    Pick the icon for an action result.

    Toggle shows where playback ended up, the other actions show the key
    that was pressed.
    """
    name = ACTION_ICONS.get(action) or STATE_ICONS[state]
    return icon_dir / name


def send_notification(summary: str, icon: Path) -> None:
    """
    Show a notification with the given summary line and icon.

    Raises:
        NotificationError: If notify-send is missing or fails.
    """
    binary = shutil.which(NOTIFY_SEND)
    if binary is None:
        raise NotificationError(f"{NOTIFY_SEND} not found on PATH")

    cmd = [
        binary,
        f"--category={NOTIFY_CATEGORY}",
        f"--icon={icon}",
        "--",
        summary,
    ]
    logger.debug("Running %s", " ".join(cmd))

    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        raise NotificationError(
            f"{NOTIFY_SEND} exited with {e.returncode}: {e.stderr.strip()}"
        ) from e
    except OSError as e:
        raise NotificationError(f"Could not run {NOTIFY_SEND}: {e}") from e
