"""Data models for Electron versions."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class InstallState(str, Enum):
    NOT_DOWNLOADED = "not_downloaded"
    DOWNLOADING = "downloading"
    DOWNLOADED = "downloaded"
    INSTALLING = "installing"
    INSTALLED = "installed"


# States in which the archive is known to be on disk
ARCHIVE_PRESENT = frozenset(
    {InstallState.DOWNLOADED, InstallState.INSTALLING, InstallState.INSTALLED}
)


class Events:
    """Names of the events published by the installer."""

    STATE_CHANGED = "state-changed"  # (version, state)
    DOWNLOADED = "downloaded"  # (version, archive_path)
    INSTALLED = "installed"  # (version, exec_path)
    DOWNLOAD_PROGRESS = "download-progress"  # (version, percent)


class ExtractOptions(BaseModel):
    """Behaviour requested from an extractor for a single call."""

    model_config = ConfigDict(frozen=True)

    # Keep packed resources (app.asar and friends) as opaque files
    preserve_packed_resources: bool = True
    preserve_permissions: bool = True


def get_zip_name(version: str, platform: str, arch: str) -> str:
    return f"electron-v{version}-{platform}-{arch}.zip"
