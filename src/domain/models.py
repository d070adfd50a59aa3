"""Domain models for the column board reorder engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

from .errors import BoardStateError


class Trigger(str, Enum):
    POINTER = "pointer"
    KEYBOARD = "keyboard"


class OutcomeKind(str, Enum):
    COLUMN_REORDER = "column-reorder"


@dataclass(frozen=True, slots=True)
class ColumnRecord:
    column_id: str
    title: str
    items: Tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class Outcome:
    kind: OutcomeKind
    column_id: str
    start_index: int
    finish_index: int


# eq=False: a new Operation is a new move even if it repeats the previous one
@dataclass(frozen=True, slots=True, eq=False)
class Operation:
    trigger: Trigger
    outcome: Outcome


@dataclass(frozen=True, slots=True)
class BoardState:
    """Immutable snapshot of the board.

    ``ordered_column_ids`` is always a permutation of the keys of
    ``column_map``; use :meth:`create` to build a validated instance.
    """

    column_map: Mapping[str, ColumnRecord]
    ordered_column_ids: Tuple[str, ...]
    last_operation: Optional[Operation] = None

    @classmethod
    def create(
        cls,
        column_map: Mapping[str, ColumnRecord],
        ordered_column_ids: Iterable[str],
        last_operation: Optional[Operation] = None,
    ) -> "BoardState":
        order = tuple(ordered_column_ids)
        if len(set(order)) != len(order):
            raise BoardStateError(
                "Duplicate column ids in order", context={"order": order}
            )
        if set(order) != set(column_map):
            raise BoardStateError(
                "Column order does not match column map",
                context={"order": order, "columns": sorted(column_map)},
            )
        for key, record in column_map.items():
            if key != record.column_id:
                raise BoardStateError(
                    f"Column map key {key!r} does not match record id {record.column_id!r}"
                )
        return cls(
            column_map=MappingProxyType(dict(column_map)),
            ordered_column_ids=order,
            last_operation=last_operation,
        )

    def columns(self) -> list[ColumnRecord]:
        return [self.column_map[cid] for cid in self.ordered_column_ids]


@dataclass(frozen=True, slots=True)
class SourceData:
    """Data attached to the dragged element when a drag starts."""

    type: str
    column_id: str
    instance_id: str


@dataclass(frozen=True, slots=True)
class TargetDescriptor:
    column_id: str
    edge_metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DropPayload:
    """Drop notification delivered to board monitors.

    An empty ``dropped_on_targets`` means the element was dropped on empty
    space.
    """

    source_data: SourceData
    dropped_on_targets: Tuple[TargetDescriptor, ...] = ()


def get_basic_data() -> BoardState:
    """Initial board: three empty columns in a fixed order.

    Deterministic (no randomness) so visual tests stay stable.
    """
    records = [
        ColumnRecord(column_id="confluence", title="Confluence"),
        ColumnRecord(column_id="jira", title="Jira"),
        ColumnRecord(column_id="trello", title="Trello"),
    ]
    return BoardState.create(
        {r.column_id: r for r in records},
        ["confluence", "jira", "trello"],
    )
