"""Global configuration and constants for the column board."""

from __future__ import annotations

import os
from typing import Final


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


LOG_LEVEL: Final = os.environ.get("BOARD_LOG_LEVEL", "INFO").upper()

# Post-move flash (milliseconds); reduced motion skips the flash entirely
FLASH_DURATION_MS: Final = _env_int("BOARD_FLASH_DURATION_MS", 700)
REDUCED_MOTION: Final = os.environ.get("BOARD_REDUCED_MOTION", "").strip().lower() in {
    "1",
    "true",
    "yes",
    "on",
}

# Number of recent live-region announcements kept for inspection
ANNOUNCEMENT_HISTORY: Final = _env_int("BOARD_ANNOUNCEMENT_HISTORY", 20)

COLUMN_MIME_TYPE: Final = "application/x-board-column"
COLUMN_WIDTH_PX: Final = 250
