"""Driving the yt-dlp command line tool: metadata, formats and downloads."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .file_utils import ensure_dir_exists

__all__ = [
    "VideoMetadata",
    "YtDlp",
    "YtDlpError",
    "parse_metadata",
    "format_selector",
    "extract_filename",
]

log = logging.getLogger(__name__)

EXECUTABLE_NAME = "yt-dlp"
UNKNOWN_TITLE = "Unknown Title"
DEFAULT_HEIGHT = "1080"
DOWNLOAD_COMPLETED = "Download completed"
_DESTINATION_MARKER = "Destination: "
_U64_LIMIT = 2**64


class YtDlpError(RuntimeError):
    """Raised when yt-dlp is missing or one of its runs fails."""


@dataclass(frozen=True)
class VideoMetadata:
    """Video information reported by yt-dlp."""

    title: str
    duration: float | None = None
    uploader: str | None = None
    upload_date: str | None = None
    view_count: int | None = None
    thumbnail: str | None = None


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _as_unsigned(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if 0 <= value < _U64_LIMIT else None


def parse_metadata(data: Any) -> VideoMetadata:
    """Build metadata from the JSON document that ``--dump-json`` prints."""
    fields: Mapping[str, Any] = data if isinstance(data, Mapping) else {}
    return VideoMetadata(
        title=_as_str(fields.get("title")) or UNKNOWN_TITLE,
        duration=_as_float(fields.get("duration")),
        uploader=_as_str(fields.get("uploader")),
        upload_date=_as_str(fields.get("upload_date")),
        view_count=_as_unsigned(fields.get("view_count")),
        thumbnail=_as_str(fields.get("thumbnail")),
    )


def format_selector(resolution: str) -> str:
    """Return the yt-dlp format selector for a ``WIDTHxHEIGHT`` resolution."""
    parts = resolution.split("x")
    height = parts[1] if len(parts) > 1 else DEFAULT_HEIGHT
    return f"best[height<={height}]"


def extract_filename(line: str) -> str | None:
    """Return the file named after ``Destination:`` in a yt-dlp output line."""
    start = line.find(_DESTINATION_MARKER)
    if start < 0:
        return None
    return line[start + len(_DESTINATION_MARKER):].strip()


async def _run(program: str | Path, *args: str) -> tuple[int, bytes, bytes]:
    process = await asyncio.create_subprocess_exec(
        os.fspath(program),
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()
    return process.returncode, stdout, stderr


def _lossy(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class YtDlp:
    """Runs yt-dlp, installing it with pip when it cannot be found."""

    def __init__(self, executable_path: str | Path | None = None) -> None:
        self.executable_path = Path(executable_path) if executable_path is not None else None

    async def initialize(self) -> None:
        """Locate yt-dlp on PATH, installing it first if it is missing."""
        found = shutil.which(EXECUTABLE_NAME)
        if found:
            self.executable_path = Path(found)
            return

        await self._install()

        found = shutil.which(EXECUTABLE_NAME)
        if not found:
            raise YtDlpError("Failed to install or find yt-dlp")
        self.executable_path = Path(found)

    async def _install(self) -> None:
        log.info("Installing yt-dlp...")
        returncode, _, stderr = await _run("pip", "install", EXECUTABLE_NAME)
        if returncode != 0:
            raise YtDlpError(f"Failed to install yt-dlp: {_lossy(stderr)}")
        log.info("yt-dlp installed successfully")

    def is_available(self) -> bool:
        return self.executable_path is not None

    def _executable(self) -> Path:
        if self.executable_path is None:
            raise YtDlpError("yt-dlp not available")
        return self.executable_path

    async def get_metadata(self, url: str) -> VideoMetadata:
        """Fetch the video's metadata without downloading it."""
        executable = self._executable()
        returncode, stdout, stderr = await _run(
            executable, "--dump-json", "--no-download", url
        )
        if returncode != 0:
            raise YtDlpError(f"Failed to get metadata: {_lossy(stderr)}")
        try:
            data = json.loads(stdout.decode("utf-8"))
        except UnicodeDecodeError as err:
            raise YtDlpError(f"yt-dlp output is not valid UTF-8: {err}") from err
        except json.JSONDecodeError as err:
            raise YtDlpError(f"yt-dlp output is not valid JSON: {err}") from err
        return parse_metadata(data)

    async def download_video(
        self, url: str, output_path: str | Path, resolution: str
    ) -> str:
        """Download the video and return the file name yt-dlp reported."""
        executable = self._executable()
        ensure_dir_exists(output_path)

        template = f"{os.fspath(output_path)}%(title)s.%(ext)s"
        returncode, stdout, stderr = await _run(
            executable,
            "--format",
            format_selector(resolution),
            "--output",
            template,
            "--merge-output-format",
            "mp4",
            url,
        )
        if returncode != 0:
            raise YtDlpError(f"Download failed: {_lossy(stderr)}")

        for line in _lossy(stdout).splitlines():
            if "has already been downloaded" in line or "Destination:" in line:
                filename = extract_filename(line)
                if filename is not None:
                    return filename
        return DOWNLOAD_COMPLETED

    async def get_formats(self, url: str) -> list[str]:
        """List the mp4 and webm format lines yt-dlp offers for the video."""
        executable = self._executable()
        returncode, stdout, stderr = await _run(executable, "--list-formats", url)
        if returncode != 0:
            raise YtDlpError(f"Failed to get formats: {_lossy(stderr)}")
        return [
            line
            for line in _lossy(stdout).splitlines()
            if "mp4" in line or "webm" in line
        ]