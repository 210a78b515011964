"""Single-flight download manager for Electron archives."""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Callable, Dict, Protocol

import aiofiles.os

from ..errors import FetchFailed
from ..paths import Paths
from .models import ARCHIVE_PRESENT, Events, InstallState, get_zip_name
from .state import EventEmitter, StateStore

logger = logging.getLogger(__name__)


def _consume_exception(task: asyncio.Task) -> None:
    # waiters may all have been cancelled; the failure is already logged
    if not task.cancelled():
        task.exception()


class Downloader(Protocol):
    async def fetch(self, version: str, platform: str, arch: str,
                    on_progress: Callable[[float], None]) -> Path:
        ...


class DownloadManager:
    """Makes sure each version's archive is fetched at most once at a time.

    Concurrent callers asking for the same version share one task and its
    outcome. A finished or failed fetch leaves the registry, so the next
    call starts afresh.
    """

    PROGRESS_STEP = 10

    def __init__(self, store: StateStore, events: EventEmitter, paths: Paths,
                 downloader: Downloader, platform: str, arch: str):
        self.store = store
        self.events = events
        self.paths = paths
        self.downloader = downloader
        self.platform = platform
        self.arch = arch
        self.downloading: Dict[str, asyncio.Task] = {}

    def archive_path(self, version: str) -> Path:
        return self.paths.electron_downloads / get_zip_name(version, self.platform, self.arch)

    async def ensure_downloaded(self, version: str) -> Path:
        """Return the archive path for ``version``, downloading it if needed."""
        task = self.downloading.get(version)
        if task is None:
            zip_file = self.archive_path(version)
            if self.store.get(version) in ARCHIVE_PRESENT:
                logger.debug('"%s" exists; no need to download', zip_file)
                return zip_file

            self.store.set(version, InstallState.DOWNLOADING)
            task = asyncio.ensure_future(self._download(version, zip_file))
            task.add_done_callback(_consume_exception)
            self.downloading[version] = task

        # A cancelled caller must not cancel the fetch other callers wait on
        return await asyncio.shield(task)

    async def _download(self, version: str, zip_file: Path) -> Path:
        logger.debug('"%s" does not exist; downloading now', zip_file)
        try:
            temp_file = await self.downloader.fetch(
                version, self.platform, self.arch, self._progress_reporter(version)
            )
            await self._persist(Path(temp_file), zip_file)
        except asyncio.CancelledError:
            self._abandon(version)
            raise
        except Exception as e:
            self._abandon(version)
            logger.error("Failed to download %s: %s", version, e)
            raise FetchFailed(version, str(e)) from e
        finally:
            self.downloading.pop(version, None)

        self.store.set(version, InstallState.DOWNLOADED)
        self.events.emit(Events.DOWNLOADED, version, zip_file)
        logger.info('"%s" downloaded', zip_file)
        return zip_file

    def _abandon(self, version: str) -> None:
        self.downloading.pop(version, None)
        self.store.set(version, InstallState.NOT_DOWNLOADED)

    def _progress_reporter(self, version: str) -> Callable[[float], None]:
        pct_done = 0

        def on_progress(percent: float) -> None:
            nonlocal pct_done
            pct = round(percent)
            if pct_done + self.PROGRESS_STEP <= pct:
                logger.info("downloading %s - %d%%", version, pct)
                pct_done = pct
                self.events.emit(Events.DOWNLOAD_PROGRESS, version, pct)

        return on_progress

    async def _persist(self, temp_file: Path, zip_file: Path) -> None:
        """Move a fetched file into the downloads directory atomically."""
        await aiofiles.os.makedirs(zip_file.parent, exist_ok=True)
        partial = zip_file.with_name(zip_file.name + ".partial")
        loop = asyncio.get_event_loop()
        try:
            # may copy across filesystems, so land next to the target first
            await loop.run_in_executor(None, shutil.move, str(temp_file), str(partial))
            await aiofiles.os.replace(partial, zip_file)
        except BaseException:
            if await aiofiles.os.path.exists(partial):
                await aiofiles.os.remove(partial)
            raise
