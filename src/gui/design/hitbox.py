"""Drop target hit-testing and destination resolution.

``attach_closest_edge`` records which edge of a drop target the pointer is
nearest to; ``extract_closest_edge`` reads it back from the target data
carried on a drop notification. ``get_reorder_destination_index`` turns a
(start, target, edge) triple into the finish index consumed by
``accessible_reorder.reorder``.

Pure logic (no PyQt6 import); the view converts ``QRect`` values into
``Rect`` before calling in.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional, Sequence

__all__ = [
    "Edge",
    "Axis",
    "Rect",
    "attach_closest_edge",
    "extract_closest_edge",
    "get_reorder_destination_index",
]

# Private key so edge data never collides with caller data
_CLOSEST_EDGE_KEY = "__closest_edge__"


class Edge(str, Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


class Axis(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float


def _distance_to_edge(edge: Edge, x: float, y: float, rect: Rect) -> float:
    if edge is Edge.TOP:
        return abs(y - rect.y)
    if edge is Edge.BOTTOM:
        return abs(rect.y + rect.height - y)
    if edge is Edge.LEFT:
        return abs(x - rect.x)
    return abs(rect.x + rect.width - x)


def attach_closest_edge(
    data: Mapping[str, Any],
    *,
    x: float,
    y: float,
    rect: Rect,
    allowed_edges: Sequence[Edge],
) -> dict[str, Any]:
    """Return a copy of ``data`` annotated with the edge nearest to (x, y).

    Ties go to the edge listed first in ``allowed_edges``.
    """
    out = dict(data)
    if not allowed_edges:
        out[_CLOSEST_EDGE_KEY] = None
        return out
    closest = min(allowed_edges, key=lambda e: _distance_to_edge(e, x, y, rect))
    out[_CLOSEST_EDGE_KEY] = closest.value
    return out


def extract_closest_edge(data: Mapping[str, Any] | None) -> Optional[Edge]:
    if not data:
        return None
    raw = data.get(_CLOSEST_EDGE_KEY)
    if raw is None:
        return None
    try:
        return Edge(raw)
    except ValueError:
        return None


def get_reorder_destination_index(
    *,
    start_index: int,
    index_of_target: int,
    closest_edge: Optional[Edge],
    axis: Axis,
) -> int:
    """Finish index for moving ``start_index`` next to ``index_of_target``.

    The result indexes the list *after* the dragged element is removed,
    which is what ``reorder`` expects. Edges that are not on ``axis`` count
    as "before".
    """
    if start_index < 0 or index_of_target < 0:
        return start_index
    if start_index == index_of_target:
        return start_index
    if closest_edge is None:
        return index_of_target

    after_edge = Edge.RIGHT if axis == Axis.HORIZONTAL else Edge.BOTTOM
    is_going_after = closest_edge == after_edge
    is_moving_forward = start_index < index_of_target

    if is_moving_forward:
        return index_of_target if is_going_after else index_of_target - 1
    return index_of_target + 1 if is_going_after else index_of_target
