"""Split-flap board widget."""

from __future__ import annotations

from textual.widgets import Static

from .common import _board_text
from .store import BoardRow


class SplitFlapBoard(Static):
    """Passive renderer: one fixed-width cell per character, one line per row."""

    DEFAULT_CSS = """
    SplitFlapBoard {
        width: auto;
        height: auto;
        padding: 1 2;
        background: #0e0d0d;
    }
    """

    def __init__(self, rows: list[BoardRow] | None = None, **kwargs) -> None:
        self._rows: list[BoardRow] = list(rows or [])
        super().__init__(_board_text(self._rows), **kwargs)

    @property
    def rows(self) -> list[BoardRow]:
        return list(self._rows)

    def set_rows(self, rows: list[BoardRow]) -> None:
        if rows == self._rows:
            return
        self._rows = list(rows)
        self.update(_board_text(self._rows))
