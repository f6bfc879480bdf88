from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)


from flapboard.config import BoardConfig  # noqa: E402


@pytest.fixture
def board_config() -> BoardConfig:
    return BoardConfig(
        quote_url="https://quotes.invalid/current-price",
        price_field="amount",
        asset="BTC",
        currency="USD",
        ticker="XYZ",
        holding=8584,
        poll_sec=20,
        request_timeout_sec=10.0,
        reveal_delay_sec=1.0,
        reveal_step_sec=0.3,
        direction_decay_sec=2.0,
        log_file="flapboard-test.log",
        log_level="INFO",
    )
