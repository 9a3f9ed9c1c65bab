"""Shared application state guarded by asyncio locks."""

from __future__ import annotations

import asyncio
import dataclasses
from uuid import UUID

from .download_manager import DownloadItem, DownloadManager
from .settings import Settings

__all__ = ["AppState"]


class AppState:
    """Download queue, settings and the URL being typed, safe to share between tasks."""

    def __init__(
        self,
        download_manager: DownloadManager | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.download_manager = download_manager if download_manager is not None else DownloadManager()
        self.settings = settings if settings is not None else Settings()
        self.current_url = ""
        self._manager_lock = asyncio.Lock()
        self._settings_lock = asyncio.Lock()
        self._url_lock = asyncio.Lock()

    async def add_download(self, url: str) -> UUID:
        """Queue a new download and return its ID."""
        async with self._manager_lock:
            return await self.download_manager.add_download(url)

    async def get_downloads(self) -> list[DownloadItem]:
        async with self._manager_lock:
            return self.download_manager.get_downloads()

    async def set_current_url(self, url: str) -> None:
        async with self._url_lock:
            self.current_url = url

    async def get_current_url(self) -> str:
        async with self._url_lock:
            return self.current_url

    async def update_settings(self, new_settings: Settings) -> None:
        async with self._settings_lock:
            self.settings = new_settings

    async def get_settings(self) -> Settings:
        """Return a copy of the current settings."""
        async with self._settings_lock:
            return dataclasses.replace(self.settings)