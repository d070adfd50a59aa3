"""Keyboard-friendly column moves built on the shared reorder primitive.

Headless logic shared by pointer drops and the keyboard fallback for drag &
drop. Nothing here imports Qt; the board view-model applies the results.

 - ``reorder`` (re-exported from ``domain.board_state``) is the single move
   primitive shared with pointer drops.
 - ``move_left`` / ``move_right`` / ``move_start`` / ``move_end`` wrap
   ``reorder`` for keyboard commands and return a ``ReorderActionResult``
   carrying the new order and the index that should receive focus. The
   spoken announcement comes from the post-move effects, not from here.
 - ``interpret_key_command`` maps key names (e.g. ``ArrowLeft``,
   ``ctrl+home``) to the verbs understood by ``KEYBOARD_MOVES``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple

from domain.board_state import reorder

__all__ = [
    "ReorderActionResult",
    "KEYBOARD_MOVES",
    "reorder",
    "move_left",
    "move_right",
    "move_start",
    "move_end",
    "interpret_key_command",
]


@dataclass(frozen=True)
class ReorderActionResult:
    items: Tuple[str, ...]
    changed: bool
    start_index: int
    focus_index: int


def _validate_index(items: Sequence[object], index: int) -> bool:
    return 0 <= index < len(items)


def _result(items: Sequence[str], start: int, finish: int) -> ReorderActionResult:
    if start == finish or not _validate_index(items, start):
        return ReorderActionResult(tuple(items), False, start, start)
    return ReorderActionResult(reorder(items, start, finish), True, start, finish)


def move_left(items: Sequence[str], index: int) -> ReorderActionResult:
    if not _validate_index(items, index) or index == 0:
        return _result(items, index, index)
    return _result(items, index, index - 1)


def move_right(items: Sequence[str], index: int) -> ReorderActionResult:
    if not _validate_index(items, index) or index == len(items) - 1:
        return _result(items, index, index)
    return _result(items, index, index + 1)


def move_start(items: Sequence[str], index: int) -> ReorderActionResult:
    if not _validate_index(items, index):
        return _result(items, index, index)
    return _result(items, index, 0)


def move_end(items: Sequence[str], index: int) -> ReorderActionResult:
    if not _validate_index(items, index):
        return _result(items, index, index)
    return _result(items, index, len(items) - 1)


KEYBOARD_MOVES: Dict[str, Callable[[Sequence[str], int], ReorderActionResult]] = {
    "left": move_left,
    "right": move_right,
    "start": move_start,
    "end": move_end,
}


def interpret_key_command(command: str) -> str:
    """Map an abstract key command to a move verb.

    Returns one of: left, right, start, end. Unknown commands return an
    empty string.
    """
    cmd = command.lower().replace(" ", "")
    if cmd in {"left", "arrowleft", "ctrl+left", "ctrl+arrowleft"}:
        return "left"
    if cmd in {"right", "arrowright", "ctrl+right", "ctrl+arrowright"}:
        return "right"
    if cmd in {"home", "ctrl+home", "start"}:
        return "start"
    if cmd in {"end", "ctrl+end"}:
        return "end"
    return ""
