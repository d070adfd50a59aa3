"""GUI view layer (PyQt6 widgets).

Exports:
 - BoardView
 - ColumnWidget
"""

from .board_view import BoardView, ColumnWidget  # noqa: F401
