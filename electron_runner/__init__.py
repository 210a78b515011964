"""Download, install and track Electron runtime versions."""

from .errors import (
    DownloadInProgress,
    ExtractFailed,
    FetchFailed,
    InstallBusy,
    InstallerError,
)
from .paths import Paths
from .runtime import Installer, HostPlatform
from .versions import InstallState, Events

__version__ = "0.1.0"

__all__ = [
    "Installer",
    "HostPlatform",
    "Paths",
    "InstallState",
    "Events",
    "InstallerError",
    "FetchFailed",
    "ExtractFailed",
    "InstallBusy",
    "DownloadInProgress",
]
