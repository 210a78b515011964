"""Zip extraction for Electron archives."""

import asyncio
import logging
import os
import stat
import zipfile
from pathlib import Path

from ..versions.models import ExtractOptions

logger = logging.getLogger(__name__)


class ZipExtractor:
    """Unpacks an archive into a directory.

    Every entry is written byte for byte, so packed resources such as
    ``app.asar`` stay single files. Unix permission bits and symlinks stored
    in the archive are restored, which macOS app bundles depend on.
    """

    async def extract(self, archive_path: Path, target_dir: Path,
                      options: ExtractOptions = ExtractOptions()) -> None:
        if not options.preserve_packed_resources:
            raise ValueError("ZipExtractor cannot unpack packed resources")
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(
            None, self._extract_all, Path(archive_path), Path(target_dir), options
        )

    def _extract_all(self, archive_path: Path, target_dir: Path,
                     options: ExtractOptions) -> None:
        target_dir.mkdir(parents=True, exist_ok=True)
        root = target_dir.resolve()
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            for info in zip_ref.infolist():
                mode = info.external_attr >> 16
                if stat.S_ISLNK(mode):
                    self._extract_symlink(zip_ref, info, root)
                    continue
                extracted = Path(zip_ref.extract(info, root))
                if options.preserve_permissions and mode and not info.is_dir():
                    os.chmod(extracted, stat.S_IMODE(mode))
        logger.debug("Extracted %s into %s", archive_path, target_dir)

    @staticmethod
    def _extract_symlink(zip_ref: zipfile.ZipFile, info: zipfile.ZipInfo, root: Path) -> None:
        link = Path(os.path.normpath(root / info.filename))
        link_target = zip_ref.read(info).decode("utf-8")
        pointee = os.path.normpath(link.parent / link_target)
        for path in (str(link), pointee):
            if os.path.commonpath([str(root), path]) != str(root):
                raise ValueError(f"Refusing to extract link outside target: {info.filename}")
        link.parent.mkdir(parents=True, exist_ok=True)
        if link.is_symlink() or link.exists():
            link.unlink()
        os.symlink(link_target, link)
