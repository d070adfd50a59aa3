"""Structured errors for the board reorder engine."""

from __future__ import annotations
from typing import Any


class BoardError(Exception):
    """Base class for board related issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class BoardStateError(BoardError, ValueError):
    """Raised when the column order is not a permutation of the column map."""


class IndexOutOfRangeError(BoardError, IndexError):
    """Raised when a reorder is requested with an index outside the order."""


class RegistryEntryNotFoundError(BoardError, KeyError):
    """Raised when no UI handle is registered for a column."""

    def __str__(self) -> str:  # KeyError would repr() the message
        return self.args[0] if self.args else ""
