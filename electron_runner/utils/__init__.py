"""Common utilities."""

from .async_http import ElectronDownloader
from .logger import setup_logging

__all__ = ["ElectronDownloader", "setup_logging"]
