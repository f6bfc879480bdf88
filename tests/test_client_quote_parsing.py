from __future__ import annotations

import asyncio
from dataclasses import replace

import aiohttp
import pytest

from flapboard.client import QuoteClient, QuoteError, _parse_price
from flapboard.config import BoardConfig


class _FakeResponse:
    def __init__(self, status: int, payload: object = None, json_error: Exception | None = None) -> None:
        self.status = status
        self._payload = payload
        self._json_error = json_error

    async def json(self, content_type: str | None = "application/json") -> object:
        if self._json_error is not None:
            raise self._json_error
        return self._payload

    async def __aenter__(self) -> "_FakeResponse":
        return self

    async def __aexit__(self, *exc_info) -> bool:
        return False


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.closed = False
        self.calls: list[tuple[str, dict[str, str]]] = []

    def get(self, url: str, *, headers: dict[str, str] | None = None, timeout=None) -> _FakeResponse:
        self.calls.append((url, dict(headers or {})))
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response

    async def close(self) -> None:
        self.closed = True


def _fetch(session: _FakeSession, config: BoardConfig):
    client = QuoteClient(config, session=session)
    return asyncio.run(client.fetch_quote())


def test_fetch_quote_parses_string_amount_with_no_cache_headers(board_config: BoardConfig) -> None:
    session = _FakeSession(_FakeResponse(200, {"amount": "50000.12", "currency": "USD"}))

    quote = _fetch(session, board_config)

    assert quote.price == 50000.12
    url, headers = session.calls[0]
    assert url == "https://quotes.invalid/current-price"
    assert headers["Cache-Control"] == "no-cache"
    assert headers["Pragma"] == "no-cache"


def test_fetch_quote_reads_configured_field(board_config: BoardConfig) -> None:
    session = _FakeSession(_FakeResponse(200, {"price": 51000}))

    quote = _fetch(session, replace(board_config, price_field="price"))

    assert quote.price == 51000.0


def test_fetch_quote_non_success_status_raises(board_config: BoardConfig) -> None:
    session = _FakeSession(_FakeResponse(500, {"amount": "50000"}))

    with pytest.raises(QuoteError, match="API error: 500"):
        _fetch(session, board_config)


def test_fetch_quote_wraps_transport_errors(board_config: BoardConfig) -> None:
    session = _FakeSession(error=aiohttp.ClientConnectionError("connection refused"))

    with pytest.raises(QuoteError, match="connection refused"):
        _fetch(session, board_config)


def test_fetch_quote_wraps_timeouts(board_config: BoardConfig) -> None:
    session = _FakeSession(error=asyncio.TimeoutError())

    with pytest.raises(QuoteError, match="TimeoutError"):
        _fetch(session, board_config)


def test_fetch_quote_wraps_malformed_json(board_config: BoardConfig) -> None:
    session = _FakeSession(_FakeResponse(200, json_error=ValueError("Expecting value")))

    with pytest.raises(QuoteError, match="Malformed JSON"):
        _fetch(session, board_config)


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"amount": "50000"}, 50000.0),
        ({"amount": " 50000.5 "}, 50000.5),
        ({"amount": 42}, 42.0),
        ({"amount": 1.25e3}, 1250.0),
    ],
)
def test_parse_price_accepts_numeric_values(payload: dict, expected: float) -> None:
    assert _parse_price(payload, "amount") == expected


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"amount": None},
        {"amount": "abc"},
        {"amount": "NaN"},
        {"amount": "inf"},
        {"amount": True},
        [50000],
        "50000",
    ],
)
def test_parse_price_rejects_missing_or_non_numeric(payload: object) -> None:
    with pytest.raises(QuoteError):
        _parse_price(payload, "amount")


def test_close_leaves_injected_session_open(board_config: BoardConfig) -> None:
    session = _FakeSession(_FakeResponse(200, {"amount": "1"}))
    client = QuoteClient(board_config, session=session)

    asyncio.run(client.close())

    assert session.closed is False
