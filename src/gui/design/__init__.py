"""Headless interaction design helpers.

Reorder moves and drop hit-testing. The Qt flash animation lives in
``gui.design.animator`` and is not imported here so this package stays
importable without PyQt6.
"""

from .accessible_reorder import (  # noqa: F401
    ReorderActionResult,
    interpret_key_command,
    move_end,
    move_left,
    move_right,
    move_start,
    reorder,
)
from .hitbox import (  # noqa: F401
    Axis,
    Edge,
    Rect,
    attach_closest_edge,
    extract_closest_edge,
    get_reorder_destination_index,
)
