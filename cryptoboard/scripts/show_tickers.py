# cryptoboard/scripts/show_tickers.py
from __future__ import annotations

import argparse
import asyncio
import json

from cryptoboard.config.settings import get_settings
from cryptoboard.schemas.tickers import TickerFilter
from cryptoboard.services.coinlore import FetchError, fetch_tickers
from cryptoboard.services.filter_engine import derive_display_list
from cryptoboard.services.icons import icon_url


async def run(query: str, ticker_filter: TickerFilter, start: int, limit: int) -> list[dict]:
    response = await fetch_tickers(start=start, limit=limit)
    rows = derive_display_list(
        response.data,
        query,
        ticker_filter,
        limit=get_settings().TOP_MOVERS_LIMIT,
    )
    return [{**t.model_dump(), "icon_url": icon_url(t.symbol)} for t in rows]


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch CoinLore tickers once and print the filtered list")
    parser.add_argument("--query", default="")
    parser.add_argument(
        "--filter",
        default=TickerFilter.ALL.value,
        choices=[f.value for f in TickerFilter],
    )
    parser.add_argument("--start", type=int, default=0)
    parser.add_argument("--limit", type=int, default=100)
    args = parser.parse_args()

    try:
        rows = asyncio.run(run(args.query, TickerFilter(args.filter), args.start, args.limit))
    except FetchError as exc:
        print(json.dumps({"error": exc.message}))
        raise SystemExit(1)

    print(json.dumps(rows))


if __name__ == "__main__":
    main()
