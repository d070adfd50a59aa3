"""Drop handling for column reordering.

One ``DragEventCoordinator`` per mounted board. It holds a single
``BoardEvent.DROP`` subscription for the board's lifetime and turns drop
notifications into committed column moves:

 1. filter: only drags started by this board instance (``can_monitor``)
    that landed on at least one target
 2. classify: only payloads whose source type is ``"column"``
 3. resolve: start index, target index and closest edge, then the finish
    index via ``get_reorder_destination_index``
 4. commit with ``Trigger.POINTER``

Anything malformed or unknown is a logged no-op. The coordinator never
raises into the event bus.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from domain.models import BoardState, DropPayload, Trigger
from gui.design.hitbox import Axis, extract_closest_edge, get_reorder_destination_index

from .event_bus import BoardEvent, Event, EventBus, Subscription

__all__ = ["DragEventCoordinator", "COLUMN_SOURCE_TYPE"]

_logger = logging.getLogger(__name__)

COLUMN_SOURCE_TYPE = "column"

StateProvider = Callable[[], BoardState]
CommitFn = Callable[[int, int, Trigger], None]


class DragEventCoordinator:
    def __init__(
        self,
        instance_id: str,
        state_provider: StateProvider,
        commit: CommitFn,
        *,
        axis: Axis = Axis.HORIZONTAL,
    ) -> None:
        self._instance_id = instance_id
        self._state_provider = state_provider
        self._commit = commit
        self._axis = axis
        self._bus: Optional[EventBus] = None
        self._subscription: Optional[Subscription] = None

    # Lifecycle --------------------------------------------------------
    def attach(self, bus: EventBus) -> None:
        if self._subscription is not None:
            return
        self._bus = bus
        self._subscription = bus.subscribe(
            BoardEvent.DROP, self._on_drop_event, can_monitor=self.can_monitor
        )

    def detach(self) -> None:
        if self._subscription is None:
            return
        if self._bus is not None:
            self._bus.unsubscribe(self._subscription)
        self._subscription = None
        self._bus = None

    @contextmanager
    def attached(self, bus: EventBus) -> Iterator["DragEventCoordinator"]:
        self.attach(bus)
        try:
            yield self
        finally:
            self.detach()

    @property
    def is_attached(self) -> bool:
        return self._subscription is not None

    # Filtering --------------------------------------------------------
    def can_monitor(self, event: Event) -> bool:
        source = getattr(event.payload, "source_data", None)
        return getattr(source, "instance_id", None) == self._instance_id

    def _on_drop_event(self, event: Event) -> None:
        payload = event.payload
        if not isinstance(payload, DropPayload):
            _logger.warning("Ignoring drop with unexpected payload %r", type(payload).__name__)
            return
        try:
            self.handle_drop(payload)
        except Exception:  # noqa: BLE001 - never raise into event delivery
            _logger.warning("Ignoring malformed drop payload %r", payload, exc_info=True)

    # Resolution -------------------------------------------------------
    def handle_drop(self, payload: DropPayload) -> bool:
        """Commit the move described by ``payload``. Returns True if committed."""
        if not payload.dropped_on_targets:
            _logger.debug("Drop on empty space ignored")
            return False
        source = payload.source_data
        if source.type != COLUMN_SOURCE_TYPE:
            _logger.debug("Drop of %r payload left to other handlers", source.type)
            return False

        order = self._state_provider().ordered_column_ids
        target = payload.dropped_on_targets[0]
        if source.column_id not in order or target.column_id not in order:
            _logger.warning(
                "Drop references unknown column (source=%r, target=%r)",
                source.column_id,
                target.column_id,
            )
            return False
        start_index = order.index(source.column_id)
        index_of_target = order.index(target.column_id)
        finish_index = get_reorder_destination_index(
            start_index=start_index,
            index_of_target=index_of_target,
            closest_edge=extract_closest_edge(target.edge_metadata),
            axis=self._axis,
        )
        self._commit(start_index, finish_index, Trigger.POINTER)
        return True
