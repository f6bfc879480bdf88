"""UI package (board TUI + runtime helpers)."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import BoardApp as BoardApp

__all__ = ["BoardApp"]


def __getattr__(name: str):
    if name == "BoardApp":
        from .app import BoardApp

        return BoardApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
