"""Price polling + reveal sequencing runtime for the split-flap board.

`BoardRuntime` owns every timer the board needs and all mutable board state:

- countdown: 1s repeating tick; reaching zero starts the next quote pull.
- reveal-delay / reveal-tick: one-shot delay, then a repeating step that walks
  the reveal index from -1 to the last row exactly once per mount.
- direction-decay: one-shot timer clearing the up/down glyph.

Timers come from the host's `set_timer` / `set_interval` (a Textual `App` or
`Screen` in production) and are tracked by name so `shutdown()` can stop all of
them. Quote pulls run as asyncio tasks so a slow request never stalls the
countdown or the reveal.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

from rich.text import Text

from ..client import QuoteClient, QuoteError
from ..config import BoardConfig
from .common import (
    LAST_ROW_INDEX,
    _board_width,
    _final_rows,
    _loading_rows,
    _merge_rows,
    _price_direction,
    _status_text,
)
from .store import BoardRow, Direction, PriceSnapshot, RevealPhase

logger = logging.getLogger(__name__)

_COUNTDOWN_TIMER = "countdown"
_REVEAL_DELAY_TIMER = "reveal-delay"
_REVEAL_TICK_TIMER = "reveal-tick"
_DIRECTION_DECAY_TIMER = "direction-decay"


class _Timer(Protocol):
    def stop(self) -> None: ...


class _TimerHost(Protocol):
    def set_timer(
        self, delay: float, callback: Callable[[], object], *, name: str | None = None
    ) -> _Timer: ...

    def set_interval(
        self, interval: float, callback: Callable[[], object], *, name: str | None = None
    ) -> _Timer: ...


class BoardRuntime:
    def __init__(self, client: QuoteClient, config: BoardConfig, *, ticker: str) -> None:
        self._client = client
        self._config = config
        self._ticker = ticker
        self._snapshot = PriceSnapshot()
        self._direction = Direction.NEUTRAL
        self._countdown = config.poll_sec
        self._reveal_phase = RevealPhase.NOT_STARTED
        self._reveal_index = -1
        self._host: _TimerHost | None = None
        self._timers: dict[str, _Timer] = {}
        self._fetch_tasks: set[asyncio.Task] = set()
        self._update_callback: Callable[[], None] | None = None
        self._closed = False

    # region State
    @property
    def ticker(self) -> str:
        return self._ticker

    @property
    def snapshot(self) -> PriceSnapshot:
        return self._snapshot

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def countdown(self) -> int:
        return self._countdown

    @property
    def reveal_phase(self) -> RevealPhase:
        return self._reveal_phase

    @property
    def reveal_index(self) -> int:
        return self._reveal_index

    @property
    def is_fetching(self) -> bool:
        return self._snapshot.is_fetching

    @property
    def holding_value(self) -> float:
        return (self._snapshot.price or 0.0) * self._config.holding

    @property
    def error_text(self) -> str:
        return f"Failed to fetch {self._config.asset} price"

    def board_width(self) -> int:
        return _board_width(self.holding_value)

    def rows(self) -> list[BoardRow]:
        width = self.board_width()
        final = _final_rows(
            ticker=self._ticker,
            asset=self._config.asset,
            currency=self._config.currency,
            holding=self._config.holding,
            price=self._snapshot.price,
            direction=self._direction,
            error=self._snapshot.error,
            width=width,
        )
        return _merge_rows(_loading_rows(width), final, self._reveal_index)

    def status_text(self) -> Text:
        return _status_text(self.is_fetching, self._countdown, self._snapshot.error)
    # endregion

    # region Lifecycle
    def set_update_callback(self, callback: Callable[[], None] | None) -> None:
        self._update_callback = callback

    def install(self, host: _TimerHost) -> None:
        if self._host is not None or self._closed:
            return
        self._host = host
        self._spawn_fetch()
        self._schedule(_COUNTDOWN_TIMER, 1.0, self._on_countdown_tick, repeat=True)

    def shutdown(self) -> None:
        if self._closed:
            return
        self._closed = True
        for timer in self._timers.values():
            timer.stop()
        self._timers.clear()
        for task in list(self._fetch_tasks):
            task.cancel()
        logger.info("Board runtime stopped")

    def request_refresh(self) -> bool:
        """Start a pull now unless one is already running."""
        if self._closed or self.is_fetching:
            return False
        return self._spawn_fetch()

    def _schedule(
        self,
        name: str,
        delay: float,
        callback: Callable[[], object],
        *,
        repeat: bool = False,
    ) -> None:
        self._cancel(name)
        if self._host is None or self._closed:
            return
        if repeat:
            timer = self._host.set_interval(delay, callback, name=name)
        else:
            timer = self._host.set_timer(delay, callback, name=name)
        self._timers[name] = timer

    def _cancel(self, name: str) -> None:
        timer = self._timers.pop(name, None)
        if timer is not None:
            timer.stop()

    def _notify(self) -> None:
        if self._closed or self._update_callback is None:
            return
        self._update_callback()
    # endregion

    # region Polling
    def _spawn_fetch(self) -> bool:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return False
        task = loop.create_task(self.refresh_quote())
        self._fetch_tasks.add(task)
        task.add_done_callback(self._fetch_tasks.discard)
        return True

    async def refresh_quote(self) -> None:
        if self._closed:
            return
        self._snapshot.begin_fetch()
        self._notify()
        try:
            quote = await self._client.fetch_quote()
        except QuoteError as exc:
            logger.warning("%s: %s", self.error_text, exc)
            self._snapshot.fail(self.error_text)
        except asyncio.CancelledError:
            self._snapshot.end_fetch()
            raise
        except Exception:
            logger.exception(self.error_text)
            self._snapshot.fail(self.error_text)
        else:
            old = self._snapshot.apply_price(quote.price)
            self._signal_direction(old, quote.price)
        self._snapshot.end_fetch()
        self._countdown = self._config.poll_sec
        self._maybe_start_reveal()
        self._notify()

    def _on_countdown_tick(self) -> None:
        if self._closed:
            return
        self._countdown -= 1
        if self._countdown <= 0:
            self._countdown = self._config.poll_sec
            self._spawn_fetch()
        self._notify()
    # endregion

    # region Direction
    def _signal_direction(self, old: float | None, new: float) -> None:
        self._cancel(_DIRECTION_DECAY_TIMER)
        self._direction = _price_direction(old, new)
        if self._direction is not Direction.NEUTRAL:
            self._schedule(
                _DIRECTION_DECAY_TIMER,
                self._config.direction_decay_sec,
                self._clear_direction,
            )

    def _clear_direction(self) -> None:
        self._timers.pop(_DIRECTION_DECAY_TIMER, None)
        if self._closed:
            return
        self._direction = Direction.NEUTRAL
        self._notify()
    # endregion

    # region Reveal
    def _maybe_start_reveal(self) -> None:
        if self._reveal_phase is not RevealPhase.NOT_STARTED or self.is_fetching:
            return
        self._reveal_phase = RevealPhase.RUNNING
        logger.info("Starting board reveal")
        self._schedule(
            _REVEAL_DELAY_TIMER, self._config.reveal_delay_sec, self._start_reveal_ticks
        )

    def _start_reveal_ticks(self) -> None:
        self._timers.pop(_REVEAL_DELAY_TIMER, None)
        if self._closed:
            return
        self._schedule(
            _REVEAL_TICK_TIMER,
            self._config.reveal_step_sec,
            self._on_reveal_tick,
            repeat=True,
        )

    def _on_reveal_tick(self) -> None:
        if self._closed or self._reveal_phase is not RevealPhase.RUNNING:
            return
        if self._reveal_index < LAST_ROW_INDEX:
            self._reveal_index += 1
            self._notify()
        if self._reveal_index >= LAST_ROW_INDEX:
            self._reveal_phase = RevealPhase.DONE
            self._cancel(_REVEAL_TICK_TIMER)
    # endregion
