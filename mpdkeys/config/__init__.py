"""
Configuration management for mpdkeys.

Settings come from three places, later ones winning:
1. built-in defaults derived from the user's home directory
2. an optional TOML file (`$XDG_CONFIG_HOME/mpdkeys/config.toml`)
3. command-line flags

Example config.toml:

    socket = "~/.config/mpd/socket"
    icon_dir = "/usr/share/icons/hicolor/scalable/actions"
    notifications = "auto"   # "auto", "always" or "never"
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.toml"
APP_DIR_NAME = "mpdkeys"


class ConfigError(Exception):
    """The configuration file is missing or unreadable."""


class NotificationMode(Enum):
    """When to show results as desktop notifications instead of console text."""

    AUTO = "auto"  # Only inside a graphical seat (XDG_SEAT set)
    ALWAYS = "always"
    NEVER = "never"


def _home(environ: Mapping[str, str]) -> Path:
    home = environ.get("HOME")
    return Path(home) if home else Path.home()


def default_socket_path(environ: Mapping[str, str] = os.environ) -> Path:
    """Where MPD usually puts its socket for a per-user setup."""
    return _home(environ) / ".config" / "mpd" / "socket"


def default_icon_dir(environ: Mapping[str, str] = os.environ) -> Path:
    return _home(environ) / ".local" / "share" / "icons"


def default_config_path(environ: Mapping[str, str] = os.environ) -> Path:
    """Location of the config file, following the XDG base directory spec."""
    config_home = environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else _home(environ) / ".config"
    return base / APP_DIR_NAME / CONFIG_FILE_NAME


@dataclass
class Settings:
    """Resolved runtime settings."""

    socket_path: Path
    icon_dir: Path
    notifications: NotificationMode = NotificationMode.AUTO
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ), repr=False)

    def use_notifications(self) -> bool:
        """Decide whether results go to a desktop notification."""
        if self.notifications == NotificationMode.ALWAYS:
            return True
        if self.notifications == NotificationMode.NEVER:
            return False
        return "XDG_SEAT" in self.environ


def _expand(value: object) -> Path:
    return Path(os.path.expanduser(str(value)))


def _parse_notification_mode(value: object) -> NotificationMode:
    try:
        return NotificationMode(str(value).lower())
    except ValueError:
        logger.warning("Unknown notifications mode %r, using 'auto'", value)
        return NotificationMode.AUTO


def load_config_file(config_path: Path) -> dict[str, object]:
    """
    Read a TOML config file.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    logger.debug("Loading config from %s", config_path)
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e


def load_settings(
    config_path: Path | None = None,
    socket_path: str | Path | None = None,
    icon_dir: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Resolve settings from defaults, the config file and explicit overrides.

    Args:
        config_path: Explicit config file. It must exist; when omitted the
            default location is used if present.
        socket_path: Override for the MPD socket path (e.g. from --socket).
        icon_dir: Override for the notification icon directory.
        environ: Environment to read HOME/XDG_* from (defaults to os.environ).

    Returns:
        The resolved Settings.

    Raises:
        ConfigError: If an explicit config file cannot be loaded, or the
            default one exists but is broken.
    """
    env: Mapping[str, str] = dict(os.environ) if environ is None else environ

    data: dict[str, object] = {}
    if config_path is not None:
        data = load_config_file(config_path)
    else:
        implicit = default_config_path(env)
        if implicit.is_file():
            data = load_config_file(implicit)

    resolved_socket = default_socket_path(env)
    if "socket" in data:
        resolved_socket = _expand(data["socket"])
    if socket_path is not None:
        resolved_socket = _expand(socket_path)

    resolved_icons = default_icon_dir(env)
    if "icon_dir" in data:
        resolved_icons = _expand(data["icon_dir"])
    if icon_dir is not None:
        resolved_icons = _expand(icon_dir)

    mode = NotificationMode.AUTO
    if "notifications" in data:
        mode = _parse_notification_mode(data["notifications"])

    return Settings(
        socket_path=resolved_socket,
        icon_dir=resolved_icons,
        notifications=mode,
        environ=env,
    )
