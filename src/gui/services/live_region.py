"""Live region announcer for screen-reader feedback.

An owned service (one per mounted board, never a module global) that
forwards short status messages to listeners, typically a ``QLabel`` acting
as the accessible live region, and keeps a ring buffer of recent messages.

Lifecycle
---------
``init()`` when the board mounts and ``teardown()`` when it unmounts. Both
are idempotent. Announcements made while not initialized are dropped with a
debug log: the live region does not exist yet (or anymore).
"""

from __future__ import annotations

import logging
from collections import deque
from threading import RLock
from typing import Callable, Deque, List

from config import settings

__all__ = ["LiveRegionAnnouncer", "AnnouncementListener"]

_logger = logging.getLogger(__name__)

AnnouncementListener = Callable[[str], None]


class LiveRegionAnnouncer:
    def __init__(self, capacity: int | None = None) -> None:
        self._capacity = max(1, capacity if capacity is not None else settings.ANNOUNCEMENT_HISTORY)
        self._lock = RLock()
        self._history: Deque[str] = deque(maxlen=self._capacity)
        self._listeners: List[AnnouncementListener] = []
        self._active = False

    # Lifecycle --------------------------------------------------------
    def init(self) -> None:
        self._active = True

    def teardown(self) -> None:
        if not self._active:
            return
        self._active = False
        with self._lock:
            self._listeners.clear()
            self._history.clear()

    @property
    def active(self) -> bool:
        return self._active

    # Listeners --------------------------------------------------------
    def add_listener(self, listener: AnnouncementListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def remove() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return remove

    # Announcing -------------------------------------------------------
    def announce(self, text: str) -> None:
        if not self._active:
            _logger.debug("Announcement dropped (live region not initialized): %s", text)
            return
        with self._lock:
            self._history.append(text)
            listeners = list(self._listeners)
        _logger.info("Announce: %s", text)
        for listener in listeners:
            try:
                listener(text)
            except Exception:  # noqa: BLE001 - announcing is best-effort
                _logger.warning("Live region listener failed", exc_info=True)

    def recent(self, limit: int | None = None) -> List[str]:
        with self._lock:
            data = list(self._history)
        return data[-limit:] if limit is not None else data

    @property
    def last(self) -> str | None:
        with self._lock:
            return self._history[-1] if self._history else None
