"""Board ViewModel.

Owns everything one mounted board needs: the immutable ``BoardState``, the
column registry, the session instance id, the drop coordinator, the live
region announcer and the post-move effects dispatcher. Views talk to it
through a small surface (``get_columns``, ``reorder_column``,
``move_column``, ``register_column``) and listen for
``BoardEvent.STATE_CHANGED`` on the shared bus.

Design:
 - Single writer: ``reorder_column`` is the only place state is replaced.
 - Effects run after the state change is published, so views have already
   re-laid out when the flash starts.
 - ``mounted()`` pairs mount/unmount so the drop subscription and the
   announcer are released on every exit path.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional

from domain.board_state import commit_reorder
from domain.models import BoardState, ColumnRecord, Trigger, get_basic_data
from gui.design.accessible_reorder import KEYBOARD_MOVES
from gui.services.column_registry import CleanupFn, ColumnRegistry
from gui.services.drag_coordinator import DragEventCoordinator
from gui.services.event_bus import BoardEvent, EventBus
from gui.services.live_region import LiveRegionAnnouncer
from gui.services.post_move_effects import PostMoveEffectsDispatcher

__all__ = ["BoardViewModel", "StateChange"]

_logger = logging.getLogger(__name__)


class StateChange:
    """Payload of ``BoardEvent.STATE_CHANGED``."""

    __slots__ = ("instance_id", "state")

    def __init__(self, instance_id: str, state: BoardState) -> None:
        self.instance_id = instance_id
        self.state = state

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"StateChange(instance_id={self.instance_id!r}, order={self.state.ordered_column_ids})"


class BoardViewModel:
    def __init__(
        self,
        state: BoardState | None = None,
        *,
        bus: EventBus | None = None,
        announcer: LiveRegionAnnouncer | None = None,
        flash: Optional[Callable[[Any], None]] = None,
    ) -> None:
        self.instance_id: str = uuid.uuid4().hex
        self.bus = bus or EventBus()
        self.registry = ColumnRegistry()
        self.announcer = announcer or LiveRegionAnnouncer()
        self._state = state or get_basic_data()
        self._coordinator = DragEventCoordinator(
            self.instance_id, lambda: self._state, self.reorder_column
        )
        self._effects = PostMoveEffectsDispatcher(self.registry, self.announcer, flash)
        self._mounted = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def mount(self) -> None:
        if self._mounted:
            return
        self.announcer.init()
        self._coordinator.attach(self.bus)
        self._mounted = True
        _logger.debug("Board %s mounted", self.instance_id)

    def unmount(self) -> None:
        if not self._mounted:
            return
        self._coordinator.detach()
        self.announcer.teardown()
        self._mounted = False
        _logger.debug("Board %s unmounted", self.instance_id)

    @contextmanager
    def mounted(self) -> Iterator["BoardViewModel"]:
        self.mount()
        try:
            yield self
        finally:
            self.unmount()

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def state(self) -> BoardState:
        return self._state

    def get_columns(self) -> List[ColumnRecord]:
        return self._state.columns()

    def index_of(self, column_id: str) -> int:
        return self._state.ordered_column_ids.index(column_id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def register_column(self, column_id: str, handle: Any) -> CleanupFn:
        return self.registry.register_column(column_id, handle)

    def reorder_column(
        self, start_index: int, finish_index: int, trigger: Trigger = Trigger.KEYBOARD
    ) -> None:
        state = commit_reorder(self._state, start_index, finish_index, trigger)
        self._state = state
        _logger.info(
            "Column %r moved %d -> %d (%s)",
            state.last_operation.outcome.column_id,
            start_index,
            finish_index,
            Trigger(trigger).value,
        )
        self.bus.publish(BoardEvent.STATE_CHANGED, StateChange(self.instance_id, state))
        # a subscriber may have committed again; effects belong to this move
        self._effects.dispatch(state)

    def move_column(self, column_id: str, verb: str) -> bool:
        """Keyboard move of ``column_id`` (verb: left, right, start, end).

        Returns False when the verb is unknown, the column is not on the board
        or the column cannot move further in that direction.
        """
        action = KEYBOARD_MOVES.get(verb)
        order = self._state.ordered_column_ids
        if action is None or column_id not in order:
            _logger.debug("Keyboard move ignored (column=%r, verb=%r)", column_id, verb)
            return False
        result = action(order, order.index(column_id))
        if not result.changed:
            return False
        self.reorder_column(result.start_index, result.focus_index, Trigger.KEYBOARD)
        return True
