"""
mpdkeys - Entry Point

Run with: python -m mpdkeys <command>

Meant to be bound to keyboard media keys by a window manager or hotkey
daemon. The result goes to a desktop notification inside a graphical session
and to stdout otherwise.
"""

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from mpdkeys import __version__
from mpdkeys.config import ConfigError, Settings, load_settings
from mpdkeys.notify import NotificationError, icon_for, send_notification
from mpdkeys.player.status import CommandResult
from mpdkeys.protocol.commands import MpdController
from mpdkeys.protocol.connection import connect
from mpdkeys.protocol.errors import MpdError

ACTIONS: dict[str, Callable[[MpdController], CommandResult]] = {
    "next": MpdController.next,
    "prev": MpdController.previous,
    "stop": MpdController.stop,
    "toggle": MpdController.toggle,
}

NO_COMMAND_MESSAGE = "Please give a command, or ask --help"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    # Stay quiet by default; stdout is reserved for the result line
    level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="mpdkeys",
        description="Command line MPD client tailored for media keys",
    )

    parser.add_argument(
        "-s",
        "--socket",
        type=str,
        default=None,
        help="Path of the MPD control socket (default: ~/.config/mpd/socket)",
    )

    parser.add_argument(
        "-i",
        "--icondir",
        type=str,
        default=None,
        help="Directory with the notification icons (default: ~/.local/share/icons)",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Config file to use (default: $XDG_CONFIG_HOME/mpdkeys/config.toml)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.add_parser("next", help="Switch to next song in playlist")
    subparsers.add_parser("prev", help="Switch to previous song in playlist")
    subparsers.add_parser("stop", help="Stop playing")
    subparsers.add_parser("toggle", help="Pause or unpause, start playing if stopped")

    return parser.parse_args(argv)


def run_action(settings: Settings, action: str) -> CommandResult:
    """Connect, perform one action and close the connection again."""
    with connect(settings.socket_path) as connection:
        return ACTIONS[action](MpdController(connection))


def report(settings: Settings, action: str, result: CommandResult) -> None:
    """Show the result as a notification or print it."""
    if settings.use_notifications():
        send_notification(result.message, icon_for(action, result.state, settings.icon_dir))
    else:
        print(result.message)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    logger = logging.getLogger(__name__)

    if args.command is None:
        print(NO_COMMAND_MESSAGE)
        return 0

    try:
        settings = load_settings(
            config_path=args.config,
            socket_path=args.socket,
            icon_dir=args.icondir,
        )
        result = run_action(settings, args.command)
        logger.debug("%s -> %r (%s)", args.command, result.message, result.state.name)
        report(settings, args.command, result)
    except (MpdError, ConfigError, NotificationError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
