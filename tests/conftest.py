"""Shared fixtures and fakes."""

import zipfile
from pathlib import Path
from typing import Dict, Optional, Union

import pytest

from electron_runner import HostPlatform, Installer, Paths
from electron_runner.runtime import ZipExtractor

HOST = HostPlatform(platform="linux", arch="x64")


def make_zip(dest: Path, files: Dict[str, Union[bytes, str]], modes: Optional[Dict[str, int]] = None) -> Path:
    """Write a zip archive; ``modes`` maps entry names to unix modes."""
    modes = modes or {}
    dest.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(dest, "w") as zf:
        for name, data in files.items():
            info = zipfile.ZipInfo(name)
            if name in modes:
                info.external_attr = modes[name] << 16
            zf.writestr(info, data)
    return dest


class FakeDownloader:
    """Produces a small Electron-like zip per fetch.

    Set ``gate`` to an asyncio.Event to hold fetches until it is set, and add
    versions to ``failures`` to make their fetch raise.
    """

    PROGRESS = (5, 12, 18, 25, 50, 100)

    def __init__(self, workdir: Path):
        self.workdir = workdir
        self.calls = []
        self.failures = set()
        self.gate = None

    async def fetch(self, version, platform, arch, on_progress):
        self.calls.append((version, platform, arch))
        if self.gate is not None:
            await self.gate.wait()
        if version in self.failures:
            raise ConnectionError("network unreachable")
        for pct in self.PROGRESS:
            on_progress(pct)
        return make_zip(
            self.workdir / f"fetch-{len(self.calls)}.tmp",
            {
                "electron": b"#!/bin/sh\necho electron\n",
                "resources/app.asar": b"packed",
                "version": version,
            },
            modes={"electron": 0o100755},
        )


class CountingExtractor(ZipExtractor):
    def __init__(self):
        self.calls = []
        self.error: Optional[Exception] = None
        self.late_error: Optional[Exception] = None

    async def extract(self, archive_path, target_dir, options):
        self.calls.append((archive_path, target_dir, options))
        if self.error is not None:
            raise self.error
        await super().extract(archive_path, target_dir, options)
        if self.late_error is not None:
            raise self.late_error


@pytest.fixture
def paths(tmp_path):
    return Paths(
        electron_downloads=tmp_path / "zips",
        electron_install=tmp_path / "current",
    )


@pytest.fixture
def downloader(tmp_path):
    workdir = tmp_path / "tmp"
    workdir.mkdir()
    return FakeDownloader(workdir)


@pytest.fixture
def extractor():
    return CountingExtractor()


@pytest.fixture
def installer(paths, downloader, extractor):
    return Installer(paths=paths, downloader=downloader, extractor=extractor, host=HOST)
