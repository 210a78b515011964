"""Install management for the single active Electron version."""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Callable, Optional, Protocol, Union

import aiofiles
import aiofiles.os

from ..errors import DownloadInProgress, ExtractFailed, InstallBusy
from ..paths import Paths
from ..versions.download_manager import DownloadManager, Downloader
from ..versions.models import ARCHIVE_PRESENT, Events, ExtractOptions, InstallState
from ..versions.reconciler import Reconciler
from ..versions.state import EventEmitter, StateStore
from .platform import HostPlatform, get_exec_path

logger = logging.getLogger(__name__)


class Extractor(Protocol):
    async def extract(self, archive_path: Path, target_dir: Path,
                      options: ExtractOptions) -> None:
        ...


def _empty_dir(folder: Path) -> None:
    if folder.exists():
        shutil.rmtree(folder)
    folder.mkdir(parents=True)


def _swap_dir(staging: Path, target: Path) -> None:
    if target.exists():
        shutil.rmtree(target)
    staging.rename(target)


class InstallManager:
    """Owns the one install directory.

    Only one install may run at a time; a second request fails fast with
    InstallBusy instead of waiting.
    """

    EXTRACT_OPTIONS = ExtractOptions(preserve_packed_resources=True)

    def __init__(self, store: StateStore, events: EventEmitter, paths: Paths,
                 downloads: DownloadManager, extractor: Extractor, host: HostPlatform):
        self.store = store
        self.events = events
        self.paths = paths
        self.downloads = downloads
        self.extractor = extractor
        self.host = host
        self.installing: Optional[str] = None

    @property
    def exec_path(self) -> Path:
        return get_exec_path(self.paths.electron_install, self.host.platform)

    async def install(self, version: str) -> Path:
        """Make ``version`` the installed version and return its executable."""
        # claim the slot before the first await so the check cannot race
        if self.installing is not None:
            raise InstallBusy(self.installing, version)
        self.installing = version

        electron_exec = self.exec_path
        try:
            if self.store.installed_version() == version:
                logger.debug("%s already installed", version)
            else:
                zip_file = await self.downloads.ensure_downloaded(version)
                await self._install_from(version, zip_file)
                self.events.emit(Events.INSTALLED, version, electron_exec)
        finally:
            self.installing = None

        logger.debug("electron_exec=%s version=%s", electron_exec, version)
        return electron_exec

    @property
    def staging_dir(self) -> Path:
        install_dir = self.paths.electron_install
        return install_dir.with_name(install_dir.name + ".staging")

    async def _install_from(self, version: str, zip_file: Path) -> None:
        install_dir = self.paths.electron_install
        staging = self.staging_dir
        logger.info('Installing %s from "%s"', version, zip_file)
        self.store.set(version, InstallState.INSTALLING)
        loop = asyncio.get_event_loop()
        try:
            # unpack beside the live install so a failure never leaves a marker behind
            await loop.run_in_executor(None, _empty_dir, staging)
            await self.extractor.extract(zip_file, staging, self.EXTRACT_OPTIONS)
            async with aiofiles.open(staging / "version", "w", encoding="utf-8") as f:
                await f.write(version)
            await loop.run_in_executor(None, _swap_dir, staging, install_dir)
        except Exception as e:
            logger.error("Failed to install %s: %s", version, e)
            await loop.run_in_executor(None, shutil.rmtree, staging, True)
            self.store.set(version, InstallState.DOWNLOADED)
            previous = self.store.installed_version()
            if previous and not (install_dir / "version").is_file():
                # the swap got as far as deleting the old install
                self.store.set(previous, InstallState.DOWNLOADED)
            raise ExtractFailed(version, str(e)) from e

        # demote first so no observer ever sees two installed versions
        previous = self.store.installed_version()
        if previous:
            self.store.set(previous, InstallState.DOWNLOADED)
        self.store.set(version, InstallState.INSTALLED)

    async def remove(self, version: str) -> None:
        """Delete a version's archive and, if it is installed, the install directory."""
        zip_file = self.downloads.archive_path(version)
        if await aiofiles.os.path.exists(zip_file):
            await aiofiles.os.remove(zip_file)

        if self.store.installed_version() == version:
            loop = asyncio.get_event_loop()
            await loop.run_in_executor(
                None, shutil.rmtree, self.paths.electron_install, True
            )

        self.store.delete(version)
        logger.info("Removed %s", version)


class Installer:
    """Manage downloading and installation of Electron versions.

    Args:
        paths: download and install locations, ``Paths.default()`` if omitted
        downloader: fetches archives, ``ElectronDownloader`` if omitted
        extractor: unpacks archives, ``ZipExtractor`` if omitted
        host: platform/arch to manage, the running host if omitted
    """

    def __init__(self, paths: Optional[Paths] = None,
                 downloader: Optional[Downloader] = None,
                 extractor: Optional[Extractor] = None,
                 host: Optional[HostPlatform] = None):
        if downloader is None:
            from ..utils.async_http import ElectronDownloader
            downloader = ElectronDownloader()
        if extractor is None:
            from .extractor import ZipExtractor
            extractor = ZipExtractor()

        self.paths = paths or Paths.default()
        self.host = host or HostPlatform.current()
        self.events = EventEmitter()
        self.store = StateStore(self.events)
        self.downloads = DownloadManager(
            self.store, self.events, self.paths, downloader,
            self.host.platform, self.host.arch,
        )
        self.installs = InstallManager(
            self.store, self.events, self.paths, self.downloads, extractor, self.host,
        )
        self.reconciler = Reconciler(
            self.store, self.paths, self.host.platform, self.host.arch
        )
        self.rebuild_states()

    @staticmethod
    def get_exec_path(folder: Union[str, Path], platform: Optional[str] = None) -> Path:
        return get_exec_path(folder, platform)

    def on(self, event: str, callback: Callable) -> None:
        self.events.on(event, callback)

    def off(self, event: str, callback: Callable) -> None:
        self.events.off(event, callback)

    def rebuild_states(self) -> None:
        self.reconciler.rebuild(
            installing=self.installs.installing,
            downloading=list(self.downloads.downloading),
        )

    def state(self, version: str) -> InstallState:
        return self.store.get(version)

    @property
    def installed_version(self) -> Optional[str]:
        return self.store.installed_version()

    def is_downloaded(self, version: str) -> bool:
        return self.store.get(version) in ARCHIVE_PRESENT

    def archive_path(self, version: str) -> Path:
        return self.downloads.archive_path(version)

    async def ensure_downloaded(self, version: str) -> Path:
        return await self.downloads.ensure_downloaded(version)

    async def install(self, version: str) -> Path:
        return await self.installs.install(version)

    async def remove(self, version: str) -> None:
        """Remove a version, refusing while it is being fetched or installed over."""
        if version in self.downloads.downloading:
            raise DownloadInProgress(version)
        installing = self.installs.installing
        if installing is not None and version in (installing, self.installed_version):
            raise InstallBusy(installing)
        await self.installs.remove(version)
