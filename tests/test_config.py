"""
Tests for settings resolution.
"""

from pathlib import Path

import pytest

from mpdkeys.config import (
    ConfigError,
    NotificationMode,
    Settings,
    default_config_path,
    load_settings,
)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A throwaway home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


def write_config(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    """Tests for settings without any config file."""

    def test_home_based_defaults(self, home: Path) -> None:
        """Socket and icons default to paths under HOME."""
        settings = load_settings(environ={"HOME": str(home)})

        assert settings.socket_path == home / ".config" / "mpd" / "socket"
        assert settings.icon_dir == home / ".local" / "share" / "icons"
        assert settings.notifications == NotificationMode.AUTO

    def test_config_path_follows_xdg(self, home: Path, tmp_path: Path) -> None:
        """XDG_CONFIG_HOME moves the config file."""
        xdg = tmp_path / "xdg"

        assert default_config_path({"HOME": str(home)}) == home / ".config" / "mpdkeys" / "config.toml"
        assert default_config_path({"HOME": str(home), "XDG_CONFIG_HOME": str(xdg)}) == (
            xdg / "mpdkeys" / "config.toml"
        )


class TestConfigFile:
    """Tests for the TOML config file."""

    def test_implicit_file(self, home: Path) -> None:
        """The default config file is picked up when present."""
        write_config(
            home / ".config" / "mpdkeys" / "config.toml",
            'socket = "/run/mpd/socket"\nicon_dir = "/usr/share/icons"\nnotifications = "never"\n',
        )

        settings = load_settings(environ={"HOME": str(home)})

        assert settings.socket_path == Path("/run/mpd/socket")
        assert settings.icon_dir == Path("/usr/share/icons")
        assert settings.notifications == NotificationMode.NEVER

    def test_explicit_file(self, home: Path, tmp_path: Path) -> None:
        """An explicit file is used instead of the default location."""
        config = write_config(tmp_path / "other.toml", 'socket = "/tmp/other.sock"\n')

        settings = load_settings(config_path=config, environ={"HOME": str(home)})

        assert settings.socket_path == Path("/tmp/other.sock")
        assert settings.icon_dir == home / ".local" / "share" / "icons"

    def test_explicit_file_missing(self, home: Path, tmp_path: Path) -> None:
        """A missing explicit file is an error."""
        with pytest.raises(ConfigError):
            load_settings(config_path=tmp_path / "nope.toml", environ={"HOME": str(home)})

    def test_invalid_toml(self, home: Path) -> None:
        """A broken config file is an error."""
        write_config(home / ".config" / "mpdkeys" / "config.toml", "socket = \n")

        with pytest.raises(ConfigError):
            load_settings(environ={"HOME": str(home)})

    def test_unknown_notification_mode(self, home: Path, tmp_path: Path) -> None:
        """Unknown modes fall back to auto."""
        config = write_config(tmp_path / "c.toml", 'notifications = "sometimes"\n')

        settings = load_settings(config_path=config, environ={"HOME": str(home)})

        assert settings.notifications == NotificationMode.AUTO

    def test_flags_win(self, home: Path, tmp_path: Path) -> None:
        """Command-line values override the file."""
        config = write_config(
            tmp_path / "c.toml",
            'socket = "/run/mpd/socket"\nicon_dir = "/usr/share/icons"\n',
        )

        settings = load_settings(
            config_path=config,
            socket_path="/tmp/flag.sock",
            icon_dir="/tmp/icons",
            environ={"HOME": str(home)},
        )

        assert settings.socket_path == Path("/tmp/flag.sock")
        assert settings.icon_dir == Path("/tmp/icons")


class TestUseNotifications:
    """Tests for Settings.use_notifications."""

    @pytest.mark.parametrize(
        ("mode", "environ", "expected"),
        [
            (NotificationMode.AUTO, {"XDG_SEAT": "seat0"}, True),
            (NotificationMode.AUTO, {}, False),
            (NotificationMode.ALWAYS, {}, True),
            (NotificationMode.NEVER, {"XDG_SEAT": "seat0"}, False),
        ],
    )
    def test_modes(self, mode: NotificationMode, environ: dict[str, str], expected: bool) -> None:
        """Auto follows XDG_SEAT, the other modes are fixed."""
        settings = Settings(
            socket_path=Path("/run/mpd/socket"),
            icon_dir=Path("/icons"),
            notifications=mode,
            environ=environ,
        )

        assert settings.use_notifications() is expected
