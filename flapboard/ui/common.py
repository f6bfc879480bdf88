"""Shared UI helpers.

This module contains pure formatting/row-building helpers used by the board
runtime and widgets. Keep it dependency-light and free of network side effects.
"""

from __future__ import annotations

from rich.text import Text

from .store import BoardRow, Direction

BOARD_ROWS = 10
LAST_ROW_INDEX = BOARD_ROWS - 1
_WIDE_BOARD_THRESHOLD = 1_000_000_000
_WIDE_BOARD_SLOTS = 22
_NARROW_BOARD_SLOTS = 20
_ERROR_TEXT = "Error"
_LOADING_TEXT = " Loading..."
_LOADING_ROW_INDEX = 4

_CELL_STYLE = "bold #f4f1e8 on #1b1a1a"
_CELL_GAP_STYLE = "on #0e0d0d"
_UP_STYLE = "bold green on #1b1a1a"
_DOWN_STYLE = "bold red on #1b1a1a"


# region Formatting Helpers
def _fmt_currency(value: float, currency: str = "USD") -> str:
    sign = "-" if value < 0 and round(abs(value), 2) > 0 else ""
    return f"{sign}{currency} {abs(value):,.2f}"


def _fmt_count(value: int) -> str:
    return f"{value:,}"
# endregion


# region Row Model
def _board_width(holding_value: float) -> int:
    if holding_value >= _WIDE_BOARD_THRESHOLD:
        return _WIDE_BOARD_SLOTS
    return _NARROW_BOARD_SLOTS


def _loading_rows(width: int) -> list[BoardRow]:
    rows = [BoardRow("", width) for _ in range(BOARD_ROWS)]
    rows[_LOADING_ROW_INDEX] = BoardRow(_LOADING_TEXT, width)
    return rows


def _final_rows(
    *,
    ticker: str,
    asset: str,
    currency: str,
    holding: int,
    price: float | None,
    direction: Direction,
    error: str | None,
    width: int,
) -> list[BoardRow]:
    current = price or 0.0
    if error:
        holding_text = _ERROR_TEXT
        value_text = _ERROR_TEXT
        price_text = _ERROR_TEXT
    else:
        holding_text = _fmt_count(holding)
        value_text = _fmt_currency(current * holding, currency)
        price_text = _fmt_currency(current, currency)
        if direction.glyph:
            price_text = f"{price_text} {direction.glyph}"
    texts = [
        "",
        f" {ticker}",
        "",
        " TOTAL HOLDINGS",
        f" {asset} {holding_text}",
        f" {value_text}",
        "",
        f" {asset} PRICE",
        f" {price_text}",
        "",
    ]
    return [BoardRow(text, width) for text in texts]


def _merge_rows(
    placeholder: list[BoardRow], final: list[BoardRow], reveal_index: int
) -> list[BoardRow]:
    if reveal_index < 0:
        return list(placeholder)
    return [
        final[idx] if idx <= reveal_index else row
        for idx, row in enumerate(placeholder)
    ]


def _price_direction(old: float | None, new: float) -> Direction:
    if old is None:
        return Direction.NEUTRAL
    if new > old:
        return Direction.UP
    if new < old:
        return Direction.DOWN
    return Direction.NEUTRAL
# endregion


# region Rendering
def _status_text(is_fetching: bool, countdown: int, error: str | None = None) -> Text:
    text = Text()
    if is_fetching:
        text.append("● ", style="yellow")
        text.append("Fetching...", style="grey70")
    else:
        plural = "s" if countdown > 1 else ""
        text.append("● ", style="green")
        text.append(f"Fetching latest in {countdown} second{plural}", style="grey70")
    if error:
        text.append(" | ", style="dim")
        text.append(f"error: {error}", style="red")
    return text


def _row_cells(row: BoardRow) -> str:
    return row.text[: row.slot_count].ljust(row.slot_count)


def _board_text(rows: list[BoardRow]) -> Text:
    text = Text()
    for idx, row in enumerate(rows):
        if idx:
            text.append("\n")
        for col, char in enumerate(_row_cells(row)):
            if col:
                text.append(" ", style=_CELL_GAP_STYLE)
            style = _CELL_STYLE
            if char == Direction.UP.glyph:
                style = _UP_STYLE
            elif char == Direction.DOWN.glyph:
                style = _DOWN_STYLE
            text.append(char, style=style)
    return text
# endregion
