"""Split-flap price board TUI entrypoint."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.containers import Center, Middle
from textual.widgets import Footer, Static

from ..client import QuoteClient
from ..config import BoardConfig, load_config
from .board import SplitFlapBoard
from .board_runtime import BoardRuntime


# region Board UI
class BoardApp(App):
    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "refresh", "Refresh"),
    ]

    CSS = """
    Screen {
        background: #000000;
    }

    #board-frame {
        width: 100%;
        height: 1fr;
    }

    #status {
        width: auto;
        height: 1;
        margin-top: 1;
    }
    """

    def __init__(
        self,
        ticker: str | None = None,
        *,
        config: BoardConfig | None = None,
        client: QuoteClient | None = None,
    ) -> None:
        super().__init__()
        self._config = config or load_config()
        self._client = client or QuoteClient(self._config)
        self._runtime = BoardRuntime(
            self._client,
            self._config,
            ticker=ticker or self._config.ticker,
        )

    @property
    def runtime(self) -> BoardRuntime:
        return self._runtime

    def compose(self) -> ComposeResult:
        with Middle(id="board-frame"):
            with Center():
                yield SplitFlapBoard(self._runtime.rows(), id="board")
            with Center():
                yield Static(self._runtime.status_text(), id="status")
        yield Footer()

    async def on_mount(self) -> None:
        self.title = f"{self._runtime.ticker} · {self._config.asset}"
        self._board = self.query_one("#board", SplitFlapBoard)
        self._status = self.query_one("#status", Static)
        self._runtime.set_update_callback(self._render_board)
        self._runtime.install(self)
        self._render_board()

    async def on_unmount(self) -> None:
        self._runtime.shutdown()
        await self._client.close()

    def action_refresh(self) -> None:
        self._runtime.request_refresh()

    def _render_board(self) -> None:
        self._board.set_rows(self._runtime.rows())
        self._status.update(self._runtime.status_text())
# endregion
