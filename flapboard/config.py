"""Runtime configuration loaded from environment variables."""
from __future__ import annotations

from dataclasses import dataclass
import os

DEFAULT_QUOTE_URL = "https://pricing.bitcoin.block.xyz/current-price"
DEFAULT_PRICE_FIELD = "amount"
DEFAULT_ASSET = "BTC"
DEFAULT_CURRENCY = "USD"
DEFAULT_TICKER = "XYZ"
DEFAULT_HOLDING = 8584
DEFAULT_POLL_SEC = 20
DEFAULT_REQUEST_TIMEOUT_SEC = 10.0
DEFAULT_REVEAL_DELAY_SEC = 1.0
DEFAULT_REVEAL_STEP_SEC = 0.3
DEFAULT_DIRECTION_DECAY_SEC = 2.0
DEFAULT_LOG_FILE = "flapboard.log"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class BoardConfig:
    quote_url: str
    price_field: str
    asset: str
    currency: str
    ticker: str
    holding: int
    poll_sec: int
    request_timeout_sec: float
    reveal_delay_sec: float
    reveal_step_sec: float
    direction_decay_sec: float
    log_file: str
    log_level: str


def load_config() -> BoardConfig:
    """Load config from environment with defaults for the public BTC quote feed."""
    return BoardConfig(
        quote_url=os.getenv("FLAPBOARD_QUOTE_URL", DEFAULT_QUOTE_URL),
        price_field=os.getenv("FLAPBOARD_PRICE_FIELD", DEFAULT_PRICE_FIELD),
        asset=os.getenv("FLAPBOARD_ASSET", DEFAULT_ASSET),
        currency=os.getenv("FLAPBOARD_CURRENCY", DEFAULT_CURRENCY),
        ticker=os.getenv("FLAPBOARD_TICKER") or DEFAULT_TICKER,
        holding=int(os.getenv("FLAPBOARD_HOLDING", str(DEFAULT_HOLDING))),
        poll_sec=max(int(os.getenv("FLAPBOARD_POLL_SEC", str(DEFAULT_POLL_SEC))), 1),
        request_timeout_sec=float(
            os.getenv("FLAPBOARD_REQUEST_TIMEOUT_SEC", DEFAULT_REQUEST_TIMEOUT_SEC)
        ),
        reveal_delay_sec=float(
            os.getenv("FLAPBOARD_REVEAL_DELAY_SEC", DEFAULT_REVEAL_DELAY_SEC)
        ),
        reveal_step_sec=float(
            os.getenv("FLAPBOARD_REVEAL_STEP_SEC", DEFAULT_REVEAL_STEP_SEC)
        ),
        direction_decay_sec=float(
            os.getenv("FLAPBOARD_DIRECTION_DECAY_SEC", DEFAULT_DIRECTION_DECAY_SEC)
        ),
        log_file=os.getenv("FLAPBOARD_LOG_FILE", DEFAULT_LOG_FILE),
        log_level=os.getenv("FLAPBOARD_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
