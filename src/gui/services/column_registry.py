"""Column handle registry.

Maps column ids to the live UI handle (usually the column ``QWidget``) so
post-move effects can find the element that moved. The registry is never a
source of truth for order; ``BoardState`` is.

Design:
 - ColumnEntry: (column_id, handle)
 - register_column returns a cleanup callable; views call it on unmount
 - Re-registering an id replaces the handle (remount)
 - A cleanup only removes the entry it created, so a late cleanup from an
   old mount cannot drop the handle of a newer one
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from domain.errors import RegistryEntryNotFoundError

__all__ = ["ColumnEntry", "ColumnRegistry", "CleanupFn"]

_logger = logging.getLogger(__name__)

CleanupFn = Callable[[], None]


@dataclass(frozen=True, eq=False)
class ColumnEntry:
    column_id: str
    handle: Any


class ColumnRegistry:
    def __init__(self) -> None:
        self._columns: Dict[str, ColumnEntry] = {}

    def register_column(self, column_id: str, handle: Any) -> CleanupFn:
        entry = ColumnEntry(column_id, handle)
        if column_id in self._columns:
            _logger.debug("Replacing registered handle for column %r", column_id)
        self._columns[column_id] = entry

        def cleanup() -> None:
            if self._columns.get(column_id) is entry:
                del self._columns[column_id]

        return cleanup

    def get_column(self, column_id: str) -> Any:
        entry = self._columns.get(column_id)
        if entry is None:
            raise RegistryEntryNotFoundError(
                f"No handle registered for column {column_id!r}",
                context={"column_id": column_id},
            )
        return entry.handle

    def try_get_column(self, column_id: str) -> Optional[Any]:
        entry = self._columns.get(column_id)
        return entry.handle if entry else None

    def list_ids(self) -> List[str]:
        return list(self._columns)

    def __contains__(self, column_id: object) -> bool:
        return column_id in self._columns

    def __len__(self) -> int:
        return len(self._columns)
