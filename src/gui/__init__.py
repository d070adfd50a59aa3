"""Board GUI public API.

Curated, intentionally small surface for callers (launcher, tests) that
should not depend on deep internal module paths.

Design Principles:
- Keep exports minimal & stable.
- Avoid side-effect heavy imports: nothing here imports PyQt6, so the
  headless engine can be used and tested without a display.
"""

from __future__ import annotations

from .services.event_bus import BoardEvent, Event, EventBus  # noqa: F401
from .services.column_registry import ColumnRegistry  # noqa: F401
from .services.live_region import LiveRegionAnnouncer  # noqa: F401
from .viewmodels.board_viewmodel import BoardViewModel, StateChange  # noqa: F401

__all__ = [
    "BoardEvent",
    "Event",
    "EventBus",
    "ColumnRegistry",
    "LiveRegionAnnouncer",
    "BoardViewModel",
    "StateChange",
]
