"""Electron runtime installation."""

from .platform import HostPlatform, exec_subpath, get_exec_path
from .extractor import ZipExtractor
from .installer import Installer, InstallManager

__all__ = [
    "HostPlatform",
    "exec_subpath",
    "get_exec_path",
    "ZipExtractor",
    "Installer",
    "InstallManager",
]
