"""In-memory version state and change notifications."""

import logging
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from .models import Events, InstallState

logger = logging.getLogger(__name__)


class EventEmitter:
    """Synchronous publish/subscribe hub."""

    def __init__(self):
        self.listeners: Dict[str, List[Callable]] = defaultdict(list)

    def on(self, event: str, callback: Callable) -> None:
        """Register a listener for an event."""
        self.listeners[event].append(callback)

    def off(self, event: str, callback: Callable) -> None:
        """Remove a listener."""
        if callback in self.listeners[event]:
            self.listeners[event].remove(callback)

    def emit(self, event: str, *args) -> None:
        """Call every listener of ``event`` in registration order."""
        for listener in list(self.listeners.get(event, [])):
            try:
                listener(*args)
            except Exception:
                logger.exception("Error in listener for %s", event)


class StateStore:
    """Maps each version to its InstallState.

    Versions without a record are ``not_downloaded``. Every change is
    announced as ``state-changed(version, state)`` on the emitter.
    """

    def __init__(self, events: EventEmitter):
        self.events = events
        self._states: Dict[str, InstallState] = {}

    def get(self, version: str) -> InstallState:
        return self._states.get(version, InstallState.NOT_DOWNLOADED)

    def set(self, version: str, state: InstallState) -> None:
        if self._states.get(version) == state:
            return
        self._states[version] = state
        self.events.emit(Events.STATE_CHANGED, version, state)

    def delete(self, version: str) -> None:
        self._states.pop(version, None)
        self.events.emit(Events.STATE_CHANGED, version, InstallState.NOT_DOWNLOADED)

    def clear(self) -> None:
        self._states.clear()

    def items(self) -> Dict[str, InstallState]:
        return dict(self._states)

    def installed_version(self) -> Optional[str]:
        for version, state in self._states.items():
            if state == InstallState.INSTALLED:
                return version
        return None
