"""Download queue: items, their status and a manager that schedules them."""

from __future__ import annotations

import asyncio
import dataclasses
import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from .url_validator import is_valid_youtube_url

__all__ = [
    "DownloadState",
    "DownloadStatus",
    "DownloadItem",
    "DownloadManager",
    "InvalidUrlError",
]

log = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENT = 3
SIMULATED_DOWNLOAD_SECONDS = 2.0


class InvalidUrlError(ValueError):
    """Raised when a URL is not a YouTube URL."""


class DownloadState(enum.Enum):
    PENDING = "pending"
    DOWNLOADING = "downloading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class DownloadStatus:
    """State of a download; a failed one carries an error message."""

    state: DownloadState
    message: str | None = None

    @classmethod
    def pending(cls) -> DownloadStatus:
        return cls(DownloadState.PENDING)

    @classmethod
    def downloading(cls) -> DownloadStatus:
        return cls(DownloadState.DOWNLOADING)

    @classmethod
    def success(cls) -> DownloadStatus:
        return cls(DownloadState.SUCCESS)

    @classmethod
    def failed(cls, message: str) -> DownloadStatus:
        return cls(DownloadState.FAILED, message)

    @property
    def is_finished(self) -> bool:
        return self.state in (DownloadState.SUCCESS, DownloadState.FAILED)


@dataclass
class DownloadItem:
    """One queued download."""

    url: str
    id: UUID = field(default_factory=uuid4)
    title: str | None = None
    status: DownloadStatus = field(default_factory=DownloadStatus.pending)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    progress: float = 0.0
    file_path: str | None = None


class DownloadManager:
    """Holds the download queue and starts downloads up to a concurrency limit."""

    def __init__(
        self,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
        simulated_duration: float = SIMULATED_DOWNLOAD_SECONDS,
    ) -> None:
        self._downloads: dict[UUID, DownloadItem] = {}
        self._active = 0
        self._max_concurrent = max(1, max_concurrent)
        self._simulated_duration = simulated_duration
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def active_downloads(self) -> int:
        return self._active

    @property
    def max_concurrent(self) -> int:
        return self._max_concurrent

    async def add_download(self, url: str) -> UUID:
        """Queue a download for the URL and start it if there is capacity."""
        if not is_valid_youtube_url(url):
            raise InvalidUrlError("Invalid YouTube URL")
        item = DownloadItem(url)
        self._downloads[item.id] = item
        self._try_start_next_download()
        return item.id

    def get_downloads(self) -> list[DownloadItem]:
        """Return copies of all downloads, newest first."""
        return sorted(
            (dataclasses.replace(item) for item in self._downloads.values()),
            key=lambda item: item.created_at,
            reverse=True,
        )

    def update_download_status(self, download_id: UUID, status: DownloadStatus) -> None:
        item = self._downloads.get(download_id)
        if item is None:
            return
        item.status = status
        if status.is_finished:
            self._active = max(0, self._active - 1)

    def update_download_progress(self, download_id: UUID, progress: float) -> None:
        item = self._downloads.get(download_id)
        if item is not None:
            item.progress = min(max(progress, 0.0), 1.0)

    def update_download_title(self, download_id: UUID, title: str) -> None:
        item = self._downloads.get(download_id)
        if item is not None:
            item.title = title

    def set_max_concurrent(self, maximum: int) -> None:
        """Set the concurrency limit; it is never less than one."""
        self._max_concurrent = max(1, maximum)

    def remove_download(self, download_id: UUID) -> DownloadItem | None:
        return self._downloads.pop(download_id, None)

    def clear_completed(self) -> None:
        """Drop every download that finished successfully."""
        self._downloads = {
            key: item
            for key, item in self._downloads.items()
            if item.status.state is not DownloadState.SUCCESS
        }

    def _try_start_next_download(self) -> None:
        if self._active >= self._max_concurrent:
            return
        next_item = next(
            (
                item
                for item in self._downloads.values()
                if item.status == DownloadStatus.pending()
            ),
            None,
        )
        if next_item is not None:
            self._start_download(next_item)

    def _start_download(self, item: DownloadItem) -> None:
        item.status = DownloadStatus.downloading()
        self._active += 1
        task = asyncio.create_task(self._run_download(item.url))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_download(self, url: str) -> None:
        log.info("Starting download for: %s", url)
        await asyncio.sleep(self._simulated_duration)
        log.info("Download completed for: %s", url)