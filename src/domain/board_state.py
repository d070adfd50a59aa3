"""Board state transitions.

All functions are pure: they return a new value and never mutate the one
passed in.
"""

from __future__ import annotations

from typing import Sequence, Tuple, TypeVar

from .errors import IndexOutOfRangeError
from .models import BoardState, Operation, Outcome, OutcomeKind, Trigger

__all__ = ["reorder", "commit_reorder"]

T = TypeVar("T")


def _check_index(length: int, name: str, value: int, **context: int) -> None:
    if not 0 <= value < length:
        raise IndexOutOfRangeError(
            f"{name}={value} outside a sequence of {length}", context=context
        )


def reorder(items: Sequence[T], start_index: int, finish_index: int) -> Tuple[T, ...]:
    """Return a copy of ``items`` with one element moved.

    Move semantics, not swap: the element at ``start_index`` is removed and
    reinserted at ``finish_index`` of the shortened sequence, every other
    element keeps its relative order.
    """
    for name, value in (("start_index", start_index), ("finish_index", finish_index)):
        _check_index(len(items), name, value, start_index=start_index, finish_index=finish_index)
    result = list(items)
    if start_index == finish_index:
        return tuple(result)
    moved = result.pop(start_index)
    result.insert(finish_index, moved)
    return tuple(result)


def commit_reorder(
    state: BoardState, start_index: int, finish_index: int, trigger: Trigger
) -> BoardState:
    """Move the column at ``start_index`` to ``finish_index``.

    A move onto the same index leaves the order untouched but still records
    an Operation so post-move feedback runs.
    """
    order = state.ordered_column_ids
    new_order = reorder(order, start_index, finish_index)
    outcome = Outcome(
        kind=OutcomeKind.COLUMN_REORDER,
        column_id=order[start_index],
        start_index=start_index,
        finish_index=finish_index,
    )
    return BoardState(
        column_map=state.column_map,
        ordered_column_ids=new_order,
        last_operation=Operation(trigger=Trigger(trigger), outcome=outcome),
    )
