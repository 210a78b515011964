"""Installer errors."""

from typing import Optional


class InstallerError(Exception):
    """Base class for everything the installer raises on purpose."""

    def __init__(self, message: str, version: Optional[str] = None):
        super().__init__(message)
        self.version = version


class FetchFailed(InstallerError):
    """The archive for a version could not be downloaded or persisted."""

    def __init__(self, version: str, reason: str):
        super().__init__(f"Failed to download Electron {version}: {reason}", version)
        self.reason = reason


class ExtractFailed(InstallerError):
    """The archive could not be unpacked into the install directory."""

    def __init__(self, version: str, reason: str):
        super().__init__(f"Failed to install Electron {version}: {reason}", version)
        self.reason = reason


class InstallBusy(InstallerError):
    def __init__(self, installing: str, requested: Optional[str] = None):
        message = f'Currently installing "{installing}"'
        if requested is not None:
            message += f', cannot install "{requested}"'
        super().__init__(message, requested)
        self.installing = installing


class DownloadInProgress(InstallerError):
    def __init__(self, version: str):
        super().__init__(f'Electron "{version}" is still downloading', version)
