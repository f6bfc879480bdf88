"""In-memory board state for UI rendering.

Kept under `flapboard.ui` because it is UI-only state, not shared client logic.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import NamedTuple


class BoardRow(NamedTuple):
    text: str
    slot_count: int


class Direction(Enum):
    UP = "↑"
    DOWN = "↓"
    NEUTRAL = ""

    @property
    def glyph(self) -> str:
        return self.value


class RevealPhase(Enum):
    NOT_STARTED = "not-started"
    RUNNING = "running"
    DONE = "done"


@dataclass
class PriceSnapshot:
    price: float | None = None
    previous_price: float | None = None
    error: str | None = None
    in_flight: int = 0
    updated_at: datetime | None = None

    @property
    def is_fetching(self) -> bool:
        return self.in_flight > 0

    def begin_fetch(self) -> None:
        self.in_flight += 1

    def end_fetch(self) -> None:
        self.in_flight = max(self.in_flight - 1, 0)

    def apply_price(self, price: float) -> float | None:
        """Store a fresh price, returning the one it replaced."""
        old = self.price
        self.previous_price = old
        self.price = price
        self.error = None
        self.updated_at = datetime.now(timezone.utc)
        return old

    def fail(self, error: str) -> None:
        self.error = error
        self.updated_at = datetime.now(timezone.utc)
