"""Recognition of YouTube URLs and extraction of their video IDs."""

from __future__ import annotations

from urllib.parse import SplitResult, parse_qsl, urlsplit

__all__ = ["is_valid_youtube_url", "extract_video_id"]

YOUTUBE_HOSTS = frozenset(
    {
        "www.youtube.com",
        "youtube.com",
        "youtu.be",
        "m.youtube.com",
        "music.youtube.com",
    }
)

_WATCH_HOSTS = frozenset({"www.youtube.com", "youtube.com", "m.youtube.com"})


def _parse(url_str: str) -> SplitResult | None:
    """Split an absolute URL, or return None if it is not one."""
    try:
        parts = urlsplit(url_str.strip())
    except ValueError:
        return None
    if not parts.scheme:
        return None
    return parts


def _host(parts: SplitResult) -> str | None:
    try:
        return parts.hostname
    except ValueError:
        return None


def is_valid_youtube_url(url_str: str) -> bool:
    """Return True if the URL points at one of the known YouTube hosts."""
    parts = _parse(url_str)
    if parts is None:
        return False
    return (_host(parts) or "") in YOUTUBE_HOSTS


def extract_video_id(url_str: str) -> str | None:
    """Return the video ID of a YouTube URL, or None if there is none."""
    parts = _parse(url_str)
    if parts is None:
        return None
    host = _host(parts)
    if host is None:
        return None

    if host == "youtu.be":
        path = parts.path or "/"
        if not path.startswith("/"):
            return None
        return path[1:].split("/", 1)[0]

    if host in _WATCH_HOSTS:
        for key, value in parse_qsl(parts.query, keep_blank_values=True):
            if key == "v":
                return value
    return None