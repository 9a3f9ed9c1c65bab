"""Terminal front end: URL entry, download table and settings panel."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .app_state import AppState
from .url_validator import is_valid_youtube_url

__all__ = ["App", "main"]

log = logging.getLogger(__name__)

APP_TITLE = "ytdl-mini"
DEFAULT_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
DEFAULT_DOWNLOAD_PATH = "~/Downloads/ytdl-mini"
URL_PLACEHOLDER = "Enter YouTube URL here..."
PATH_PLACEHOLDER = "Download path..."

RESOLUTION_CHOICES = (
    ("1920x1080", "1920x1080 (1080p)"),
    ("1280x720", "1280x720 (720p)"),
    ("2560x1440", "2560x1440 (1440p)"),
    ("3840x2160", "3840x2160 (4K)"),
)
SELECTED_RESOLUTION = "1920x1080"

_RULE = "-" * 60

HELP_TEXT = (
    "Type a URL to replace the input, press Enter on an empty line to download.\n"
    "Commands: :settings  :browse  :backspace  :quit"
)


@dataclass(frozen=True)
class _Command:
    names: tuple[str, ...]


_QUIT = _Command((":q", ":quit"))
_SETTINGS = _Command((":s", ":settings"))
_BROWSE = _Command((":b", ":browse"))
_BACKSPACE = _Command((":bs", ":backspace"))


class App:
    """The main window's state and the actions its controls trigger."""

    def __init__(self, app_state: AppState | None = None) -> None:
        self.app_state = app_state if app_state is not None else AppState()
        self.url_input = DEFAULT_URL
        self.download_path_input = DEFAULT_DOWNLOAD_PATH
        self.show_settings = False

    def add_download(self) -> bool:
        """Accept the URL in the input box; clear it and return True if it is valid."""
        url = self.url_input
        if not url.strip():
            return False
        if not is_valid_youtube_url(url):
            log.warning("Invalid YouTube URL: %s", url)
            return False
        log.info("Adding download for: %s", url)
        self.url_input = ""
        return True

    def toggle_settings(self) -> bool:
        """Show or hide the settings panel and return whether it is now shown."""
        self.show_settings = not self.show_settings
        return self.show_settings

    def browse_download_path(self) -> Path:
        """Resolve the download path typed in the settings panel."""
        path = Path(self.download_path_input).expanduser()
        log.info("Browse for download path: %s", path)
        return path

    def backspace(self) -> None:
        """Delete the last character of the URL input."""
        self.url_input = self.url_input[:-1]

    def _render_url_input(self) -> list[str]:
        shown = self.url_input if self.url_input else URL_PLACEHOLDER
        return [f"[ {shown} ]  [Download]  [Settings]", _RULE]

    def _render_downloads_table(self) -> list[str]:
        header = f"{'Status':<20}{'Title':<30}{'Created':<20}"
        return [
            header.rstrip(),
            _RULE,
            "📥",
            "No downloads yet",
            "Add a YouTube URL above to start downloading",
        ]

    def _render_settings(self) -> list[str]:
        if not self.show_settings:
            return []
        lines = [_RULE, "Settings", "Default Resolution:"]
        for value, label in RESOLUTION_CHOICES:
            marker = "(*)" if value == SELECTED_RESOLUTION else "( )"
            lines.append(f"  {marker} {label}")
        path = self.download_path_input if self.download_path_input else PATH_PLACEHOLDER
        lines.append("Download Path:")
        lines.append(f"[ {path} ]  [Browse]")
        return lines

    def render(self) -> str:
        """Draw the whole window as text."""
        lines = [APP_TITLE, _RULE]
        lines += self._render_url_input()
        lines += self._render_downloads_table()
        lines += self._render_settings()
        return "\n".join(lines)

    def handle_line(self, line: str, out: TextIO) -> bool:
        """Apply one line of user input; return False when the user quits."""
        command = line.strip()
        if command in _QUIT.names:
            return False
        if command in _SETTINGS.names:
            self.toggle_settings()
        elif command in _BROWSE.names:
            print(f"Download path: {self.browse_download_path()}", file=out)
        elif command in _BACKSPACE.names:
            self.backspace()
        elif not command:
            if not self.add_download():
                print(f"Invalid YouTube URL: {self.url_input}", file=out)
        else:
            self.url_input = command
        return True


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_TITLE, description="A minimalist YouTube downloader."
    )
    parser.add_argument("--url", help="initial contents of the URL input")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the interactive terminal application."""
    args = _parser().parse_args(argv)
    logging.basicConfig(level=logging.WARNING)
    log.info("Starting ytdl-mini application")

    app = App()
    if args.url is not None:
        app.url_input = args.url

    out = sys.stdout
    print(HELP_TEXT, file=out)
    print(app.render(), file=out)
    for raw in sys.stdin:
        if not app.handle_line(raw.rstrip("\n"), out):
            break
        print(app.render(), file=out)
    return 0