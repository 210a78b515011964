"""Host platform detection in Electron's naming."""

import platform as _platform
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

# Map to Electron release identifiers
OS_MAP = {
    "windows": "win32",
    "linux": "linux",
    "darwin": "darwin",
}
ARCH_MAP = {
    "amd64": "x64",
    "x86_64": "x64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "arm64": "arm64",
    "aarch64": "arm64",
    "armv7l": "armv7l",
}

EXEC_SUBPATHS = {
    "darwin": "Electron.app/Contents/MacOS/Electron",
    "win32": "electron.exe",
}


class HostPlatform(BaseModel):
    model_config = ConfigDict(frozen=True)

    platform: str
    arch: str

    @classmethod
    def current(cls) -> "HostPlatform":
        system = _platform.system().lower()
        machine = _platform.machine().lower()
        return cls(platform=OS_MAP.get(system, system), arch=ARCH_MAP.get(machine, machine))

    @property
    def exec_subpath(self) -> str:
        return exec_subpath(self.platform)


def exec_subpath(platform: Optional[str] = None) -> str:
    """Path of the Electron executable relative to the install directory."""
    if platform is None:
        platform = HostPlatform.current().platform
    return EXEC_SUBPATHS.get(platform, "electron")


def get_exec_path(folder: Union[str, Path], platform: Optional[str] = None) -> Path:
    return Path(folder) / exec_subpath(platform)
