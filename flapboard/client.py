"""Thin async wrapper over aiohttp for single-quote price pulls."""
from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone

import aiohttp

from .config import BoardConfig

logger = logging.getLogger(__name__)

_NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Accept": "application/json",
}


class QuoteError(RuntimeError):
    """Raised for any failed quote pull (transport, status or payload)."""


@dataclass(frozen=True)
class Quote:
    price: float
    fetched_at: datetime


def _parse_price(payload: object, field: str) -> float:
    if not isinstance(payload, dict):
        raise QuoteError(f"Unexpected payload type: {type(payload).__name__}")
    if field not in payload:
        raise QuoteError(f"Missing price field {field!r}")
    raw = payload[field]
    if isinstance(raw, bool):
        raise QuoteError(f"Invalid price value: {raw!r}")
    try:
        price = float(str(raw).strip())
    except (TypeError, ValueError) as exc:
        raise QuoteError(f"Invalid price value: {raw!r}") from exc
    if not math.isfinite(price):
        raise QuoteError(f"Invalid price value: {raw!r}")
    return price


class QuoteClient:
    def __init__(
        self,
        config: BoardConfig,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._timeout = aiohttp.ClientTimeout(total=max(config.request_timeout_sec, 0.1))
        self._session = session
        self._owns_session = session is None

    @property
    def url(self) -> str:
        return self._config.quote_url

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def fetch_quote(self) -> Quote:
        session = self._ensure_session()
        try:
            async with session.get(
                self._config.quote_url,
                headers=_NO_CACHE_HEADERS,
                timeout=self._timeout,
            ) as response:
                if not 200 <= response.status < 300:
                    raise QuoteError(f"API error: {response.status}")
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise QuoteError(str(exc) or exc.__class__.__name__) from exc
        except ValueError as exc:
            raise QuoteError(f"Malformed JSON body: {exc}") from exc
        price = _parse_price(payload, self._config.price_field)
        logger.debug("Fetched %s price %s from %s", self._config.asset, price, self.url)
        return Quote(price=price, fetched_at=datetime.now(timezone.utc))

    async def close(self) -> None:
        if self._session is None or not self._owns_session:
            return
        if not self._session.closed:
            await self._session.close()
        self._session = None
