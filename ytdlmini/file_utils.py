"""Filesystem helpers: download directory, directory creation, safe names."""

from __future__ import annotations

import unicodedata
from pathlib import Path

import platformdirs

__all__ = [
    "get_downloads_dir",
    "ensure_dir_exists",
    "sanitize_filename",
    "get_file_extension",
]

APP_DIR_NAME = "ytdl-mini"
MAX_FILENAME_BYTES = 200

_UNSAFE_CHARS = frozenset('/\\:*?"<>|')
_KNOWN_EXTENSIONS = frozenset({"mp4", "webm", "mkv", "avi", "mov"})
_DEFAULT_EXTENSION = "mp4"


def get_downloads_dir() -> Path:
    """Return the platform's default download directory for this application."""
    downloads = platformdirs.user_downloads_dir()
    if downloads:
        return Path(downloads) / APP_DIR_NAME
    try:
        home = Path.home()
    except RuntimeError:
        home = Path(".")
    return home / "Downloads" / APP_DIR_NAME


def ensure_dir_exists(path: str | Path) -> None:
    """Create the directory and its parents if the path does not exist yet."""
    path = Path(path)
    if not path.exists():
        path.mkdir(parents=True, exist_ok=True)


def _safe_char(char: str) -> str:
    if char in _UNSAFE_CHARS or unicodedata.category(char) == "Cc":
        return "_"
    return char


def sanitize_filename(title: str) -> str:
    """Turn a video title into a name that is safe to use as a filename."""
    safe_name = "".join(_safe_char(c) for c in title).strip()
    encoded = safe_name.encode("utf-8")
    if len(encoded) > MAX_FILENAME_BYTES:
        safe_name = encoded[:MAX_FILENAME_BYTES].decode("utf-8", errors="ignore")
    return safe_name or "video"


def get_file_extension(format: str) -> str:
    """Return the file extension for a container format, defaulting to mp4."""
    lowered = format.lower()
    return lowered if lowered in _KNOWN_EXTENSIONS else _DEFAULT_EXTENSION