"""Version state and download management."""

from .models import InstallState, Events, ExtractOptions
from .state import EventEmitter, StateStore
from .reconciler import Reconciler
from .download_manager import DownloadManager

__all__ = [
    "InstallState",
    "Events",
    "ExtractOptions",
    "EventEmitter",
    "StateStore",
    "Reconciler",
    "DownloadManager",
]
