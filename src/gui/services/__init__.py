"""Service layer exports.

Responsibilities:
 - EventBus publish/subscribe core
 - Column handle registry
 - Drop coordination, live region announcements and post-move effects
"""

from .event_bus import EventBus, BoardEvent  # noqa: F401
from .column_registry import ColumnRegistry  # noqa: F401
from .drag_coordinator import DragEventCoordinator  # noqa: F401
from .live_region import LiveRegionAnnouncer  # noqa: F401
from .post_move_effects import PostMoveEffectsDispatcher  # noqa: F401

__all__ = [
    "EventBus",
    "BoardEvent",
    "ColumnRegistry",
    "DragEventCoordinator",
    "LiveRegionAnnouncer",
    "PostMoveEffectsDispatcher",
]
