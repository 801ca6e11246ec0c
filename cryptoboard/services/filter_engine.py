"""Client-side search and top-mover filtering over the fetched tickers."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from cryptoboard.schemas.tickers import Ticker, TickerFilter


TOP_MOVERS_LIMIT = 10


def matches_query(ticker: Ticker, query: str) -> bool:
    needle = query.casefold()
    return needle in ticker.name.casefold() or needle in ticker.symbol.casefold()


def search_tickers(tickers: Iterable[Ticker], query: str = "") -> List[Ticker]:
    """Keep tickers whose name or symbol contains ``query`` (case-insensitive)."""
    if not query:
        return list(tickers)
    return [t for t in tickers if matches_query(t, query)]


def top_movers(tickers: Sequence[Ticker], *, gainers: bool, limit: int = TOP_MOVERS_LIMIT) -> List[Ticker]:
    """
    Sort by 24h change and take the first ``limit``.

    sorted() is stable in both directions, so tickers with an equal change keep
    their input order for gainers and losers alike.
    """
    ranked = sorted(tickers, key=lambda t: t.percent_change_24h, reverse=gainers)
    return ranked[:limit]


def derive_display_list(
    tickers: Sequence[Ticker],
    query: str = "",
    ticker_filter: TickerFilter = TickerFilter.ALL,
    limit: int = TOP_MOVERS_LIMIT,
) -> List[Ticker]:
    """
    Return the list to display for a search string and a category filter.

    Search runs first, then the filter. ``ALL`` is uncapped; the top gainers and
    top losers views return at most ``limit`` rows. The input is never mutated.
    """
    found = search_tickers(tickers, query)

    if ticker_filter is TickerFilter.TOP_GAINERS:
        return top_movers(found, gainers=True, limit=limit)
    if ticker_filter is TickerFilter.TOP_LOSERS:
        return top_movers(found, gainers=False, limit=limit)
    return found
