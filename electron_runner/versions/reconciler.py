"""Rebuild version state from what is on disk."""

import logging
import re
from typing import Collection, Iterable, Optional

from ..paths import Paths
from .models import InstallState
from .state import StateStore

logger = logging.getLogger(__name__)


class Reconciler:
    def __init__(self, store: StateStore, paths: Paths, platform: str, arch: str):
        self.store = store
        self.paths = paths
        self.zip_pattern = re.compile(
            rf"^electron-v(.+)-{re.escape(platform)}-{re.escape(arch)}\.zip(\.partial)?$"
        )

    def read_installed_version(self) -> Optional[str]:
        """Return the version recorded in the install marker, if any."""
        version_file = self.paths.electron_install / "version"
        try:
            version = version_file.read_text(encoding="utf-8").strip()
        except (FileNotFoundError, NotADirectoryError):
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning('Ignoring unreadable install marker "%s": %s', version_file, e)
            return None
        return version or None

    def downloaded_versions(self, downloading: Collection[str] = ()) -> Iterable[str]:
        """List versions with a complete archive.

        Leftover ``.partial`` files from an interrupted move are deleted,
        except those belonging to a fetch still running in this process.
        """
        downloads = self.paths.electron_downloads
        if not downloads.is_dir():
            return []
        versions = []
        for entry in sorted(downloads.iterdir()):
            match = self.zip_pattern.match(entry.name)
            if not match or not entry.is_file():
                continue
            version, partial = match.groups()
            if not partial:
                versions.append(version)
            elif version not in downloading:
                logger.info('Removing stale partial download "%s"', entry)
                entry.unlink(missing_ok=True)
        return versions

    def rebuild(self, installing: Optional[str] = None,
                downloading: Collection[str] = ()) -> None:
        """Seed the store from disk, then overlay the work running in this process.

        Args:
            installing: version holding the install slot, if any
            downloading: versions with an in-flight fetch
        """
        store = self.store
        store.clear()

        # currently installed
        installed = self.read_installed_version()
        if installed:
            store.set(installed, InstallState.INSTALLED)

        if installing:
            store.set(installing, InstallState.INSTALLING)

        # already downloaded
        for version in self.downloaded_versions(downloading):
            if store.get(version) in (InstallState.INSTALLED, InstallState.INSTALLING):
                continue
            store.set(version, InstallState.DOWNLOADED)

        # being downloaded now
        for version in downloading:
            store.set(version, InstallState.DOWNLOADING)

        logger.debug("Reconciled states: %s", {v: s.value for v, s in store.items().items()})
