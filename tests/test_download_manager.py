from datetime import timezone
from uuid import uuid4

import pytest

from ytdlmini.download_manager import (
    DownloadItem,
    DownloadManager,
    DownloadState,
    DownloadStatus,
    InvalidUrlError,
)

URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
SHORT_URL = "https://youtu.be/dQw4w9WgXcQ"


@pytest.fixture
def manager():
    return DownloadManager(simulated_duration=0.0)


def _by_id(manager, download_id):
    return next(item for item in manager.get_downloads() if item.id == download_id)


def test_item_defaults():
    item = DownloadItem(URL)
    assert item.url == URL
    assert item.title is None
    assert item.status == DownloadStatus.pending()
    assert item.progress == 0.0
    assert item.file_path is None
    assert item.created_at.tzinfo == timezone.utc


def test_item_ids_are_unique():
    assert DownloadItem(URL).id != DownloadItem(URL).id and len({DownloadItem(URL).id for _ in range(5)}) == 5


def test_status_equality_and_finished():
    assert DownloadStatus.failed("boom") == DownloadStatus(DownloadState.FAILED, "boom")
    assert DownloadStatus.failed("a") != DownloadStatus.failed("b")
    assert DownloadStatus.success().is_finished
    assert DownloadStatus.failed("x").is_finished
    assert not DownloadStatus.pending().is_finished
    assert not DownloadStatus.downloading().is_finished


@pytest.mark.asyncio
async def test_add_download_starts_it(manager):
    download_id = await manager.add_download(URL)
    item = _by_id(manager, download_id)
    assert item.url == URL
    assert item.status == DownloadStatus.downloading()
    assert manager.active_downloads == 1


@pytest.mark.asyncio
async def test_add_invalid_url(manager):
    with pytest.raises(InvalidUrlError):
        await manager.add_download("https://www.google.com")
    assert manager.get_downloads() == []
    assert manager.active_downloads == 0


@pytest.mark.asyncio
async def test_concurrency_limit(manager):
    ids = [await manager.add_download(URL) for _ in range(4)]
    states = [_by_id(manager, i).status.state for i in ids]
    assert states[:3] == [DownloadState.DOWNLOADING] * 3
    assert states[3] is DownloadState.PENDING
    assert manager.active_downloads == manager.max_concurrent


@pytest.mark.asyncio
async def test_finishing_frees_a_slot(manager):
    ids = [await manager.add_download(URL) for _ in range(3)]
    manager.update_download_status(ids[0], DownloadStatus.success())
    assert manager.active_downloads == 2
    new_id = await manager.add_download(SHORT_URL)
    assert _by_id(manager, new_id).status == DownloadStatus.downloading()
    assert manager.active_downloads == 3


@pytest.mark.asyncio
async def test_failed_status_keeps_message(manager):
    download_id = await manager.add_download(URL)
    manager.update_download_status(download_id, DownloadStatus.failed("network"))
    item = _by_id(manager, download_id)
    assert item.status.message == "network"
    assert manager.active_downloads == 0


@pytest.mark.asyncio
async def test_active_count_never_negative(manager):
    download_id = await manager.add_download(URL)
    manager.update_download_status(download_id, DownloadStatus.success())
    manager.update_download_status(download_id, DownloadStatus.success())
    assert manager.active_downloads == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("given,expected", [(1.5, 1.0), (-0.2, 0.0), (0.5, 0.5)])
async def test_progress_is_clamped(manager, given, expected):
    download_id = await manager.add_download(URL)
    manager.update_download_progress(download_id, given)
    assert _by_id(manager, download_id).progress == expected


@pytest.mark.asyncio
async def test_update_title(manager):
    download_id = await manager.add_download(URL)
    manager.update_download_title(download_id, "Some video")
    assert _by_id(manager, download_id).title == "Some video"


@pytest.mark.asyncio
async def test_updates_to_unknown_id_are_ignored(manager):
    download_id = await manager.add_download(URL)
    unknown = uuid4()
    manager.update_download_status(unknown, DownloadStatus.success())
    manager.update_download_progress(unknown, 0.7)
    manager.update_download_title(unknown, "x")
    downloads = manager.get_downloads()
    assert [item.id for item in downloads] == [download_id]
    assert manager.active_downloads == 1


@pytest.mark.asyncio
async def test_get_downloads_newest_first(manager):
    for _ in range(4):
        await manager.add_download(URL)
    stamps = [item.created_at for item in manager.get_downloads()]
    assert stamps == sorted(stamps, reverse=True)


@pytest.mark.asyncio
async def test_get_downloads_returns_copies(manager):
    download_id = await manager.add_download(URL)
    copy = _by_id(manager, download_id)
    copy.title = "changed"
    copy.progress = 0.9
    fresh = _by_id(manager, download_id)
    assert fresh.title is None
    assert fresh.progress == 0.0


def test_set_max_concurrent_minimum_one(manager):
    manager.set_max_concurrent(0)
    assert manager.max_concurrent == 1
    manager.set_max_concurrent(7)
    assert manager.max_concurrent == 7


@pytest.mark.asyncio
async def test_max_concurrent_one(manager):
    manager.set_max_concurrent(1)
    first = await manager.add_download(URL)
    second = await manager.add_download(URL)
    assert _by_id(manager, first).status.state is DownloadState.DOWNLOADING
    assert _by_id(manager, second).status.state is DownloadState.PENDING


@pytest.mark.asyncio
async def test_remove_download(manager):
    download_id = await manager.add_download(URL)
    removed = manager.remove_download(download_id)
    assert removed.id == download_id
    assert manager.get_downloads() == []
    assert manager.remove_download(download_id) is None


@pytest.mark.asyncio
async def test_clear_completed_keeps_unfinished_and_failed(manager):
    done = await manager.add_download(URL)
    failed = await manager.add_download(URL)
    running = await manager.add_download(URL)
    manager.update_download_status(done, DownloadStatus.success())
    manager.update_download_status(failed, DownloadStatus.failed("err"))
    manager.clear_completed()
    remaining = {item.id for item in manager.get_downloads()}
    assert remaining == {failed, running}