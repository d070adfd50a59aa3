"""Post-move feedback: flash the moved column and announce the new position.

``dispatch(state)`` is edge-triggered on ``state.last_operation``: it fires
once per committed Operation (compared by identity) and never for a state
without one, so re-publishing an unchanged state is harmless.

Effects are best-effort. The move is already committed when they run, so a
missing registry entry or a failing flash only skips the flash; the
announcement still goes out.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from domain.errors import RegistryEntryNotFoundError
from domain.models import BoardState, Operation, OutcomeKind

from .column_registry import ColumnRegistry
from .live_region import LiveRegionAnnouncer

__all__ = ["PostMoveEffectsDispatcher", "format_move_announcement"]

_logger = logging.getLogger(__name__)

FlashFn = Callable[[Any], None]


def format_move_announcement(title: str, start_index: int, finish_index: int, total: int) -> str:
    return (
        f"You've moved {title} from position {start_index + 1} "
        f"to position {finish_index + 1} of {total}."
    )


class PostMoveEffectsDispatcher:
    def __init__(
        self,
        registry: ColumnRegistry,
        announcer: LiveRegionAnnouncer,
        flash: Optional[FlashFn] = None,
    ) -> None:
        self._registry = registry
        self._announcer = announcer
        self._flash = flash
        self._last_handled: Optional[Operation] = None

    def dispatch(self, state: BoardState) -> bool:
        """Run effects for a new Operation. Returns True if effects fired."""
        operation = state.last_operation
        if operation is None or operation is self._last_handled:
            return False
        self._last_handled = operation
        outcome = operation.outcome
        if outcome.kind == OutcomeKind.COLUMN_REORDER:
            self._column_reorder(state, operation)
            return True
        _logger.warning("No post-move effects for outcome kind %r", outcome.kind)
        return False

    def _column_reorder(self, state: BoardState, operation: Operation) -> None:
        outcome = operation.outcome
        column = state.column_map.get(outcome.column_id)
        if column is None:
            _logger.warning("Moved column %r missing from board state", outcome.column_id)
            return
        self._flash_column(column.column_id)
        self._announcer.announce(
            format_move_announcement(
                column.title,
                outcome.start_index,
                outcome.finish_index,
                len(state.ordered_column_ids),
            )
        )

    def _flash_column(self, column_id: str) -> None:
        if self._flash is None:
            return
        try:
            handle = self._registry.get_column(column_id)
        except RegistryEntryNotFoundError:
            _logger.warning("Skipping flash: column %r is not mounted", column_id)
            return
        try:
            self._flash(handle)
        except Exception:  # noqa: BLE001 - cosmetic effect only
            _logger.warning("Flash effect failed for column %r", column_id, exc_info=True)
