"""Entrypoint for the split-flap price board."""
from __future__ import annotations

import argparse
import logging

from .config import BoardConfig, load_config

_MAX_TICKER_LEN = 19


def _parse_ticker(raw: str) -> str:
    ticker = raw.strip()
    if not ticker:
        raise argparse.ArgumentTypeError("ticker must not be empty")
    if any(char.isspace() for char in ticker):
        raise argparse.ArgumentTypeError(f"ticker must not contain spaces: {raw!r}")
    if len(ticker) > _MAX_TICKER_LEN:
        raise argparse.ArgumentTypeError(
            f"ticker must be at most {_MAX_TICKER_LEN} characters: {raw!r}"
        )
    return ticker


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flapboard",
        description="Live split-flap board for a single asset price and holding.",
    )
    parser.add_argument(
        "--ticker",
        type=_parse_ticker,
        default=None,
        help="Symbol shown on the board header row (default: FLAPBOARD_TICKER or XYZ).",
    )
    return parser


def _configure_logging(config: BoardConfig) -> None:
    level = getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(
        filename=config.log_file,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = load_config()
    _configure_logging(config)
    try:
        ticker = args.ticker or _parse_ticker(config.ticker)
    except argparse.ArgumentTypeError as exc:
        parser.error(f"FLAPBOARD_TICKER: {exc}")

    from .ui import BoardApp

    BoardApp(ticker, config=config).run()


if __name__ == "__main__":
    main()
