"""Synchronous board event bus.

Publish/subscribe between the drag-and-drop view layer and the board
engine:

 - Producers (column widgets, the board view-model) publish ``BoardEvent``s
 - Consumers subscribe with an optional ``can_monitor`` predicate so one
   board ignores drags that another board started
 - A failing handler never breaks the publish cycle; the failure is
   logged and kept in ``errors``
 - Subscriptions are cancellable handles; one-shot (``once``) handlers are
   dropped after their first successful call
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional, Protocol

__all__ = [
    "BoardEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

_logger = logging.getLogger(__name__)


class BoardEvent(str, Enum):  # str subclass keeps names readable in logs
    DROP = "drop"
    STATE_CHANGED = "state_changed"


@dataclass
class Event:
    name: str  # BoardEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    can_monitor: Optional[Callable[[Event], bool]] = None
    active: bool = True

    def cancel(self) -> None:
        self.active = False

    def accepts(self, event: Event) -> bool:
        if not self.active:
            return False
        if self.can_monitor is None:
            return True
        return bool(self.can_monitor(event))


class EventBus:
    """Synchronous event dispatcher.

    Handlers run one at a time on the publishing thread. The subscriber list
    is copied before dispatch so handlers can subscribe/unsubscribe while an
    event is being delivered.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(
        self,
        name: str | BoardEvent,
        handler: EventHandler,
        *,
        once: bool = False,
        can_monitor: Optional[Callable[[Event], bool]] = None,
    ) -> Subscription:
        key = name.value if isinstance(name, BoardEvent) else name
        sub = Subscription(event=key, handler=handler, once=once, can_monitor=can_monitor)
        with self._lock:
            self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                self._subs[sub.event] = [s for s in bucket if s is not sub]
                if not self._subs[sub.event]:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | BoardEvent, payload: Any = None) -> Event:
        key = name.value if isinstance(name, BoardEvent) else name
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        to_remove: List[Subscription] = []
        for sub in subs:
            try:
                if not sub.accepts(evt):
                    continue
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                _logger.exception("Handler for %r failed", key)
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    to_remove.append(sub)
        for sub in to_remove:
            self.unsubscribe(sub)
        return evt

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subscriber_count(self, name: str | BoardEvent) -> int:
        key = name.value if isinstance(name, BoardEvent) else name
        with self._lock:
            return len(self._subs.get(key, ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
