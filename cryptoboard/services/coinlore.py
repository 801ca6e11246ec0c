"""Helpers for interacting with the public CoinLore ticker API."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from cryptoboard.config.settings import get_settings
from cryptoboard.schemas.tickers import TickerListResponse

logger = logging.getLogger("cryptoboard.fetcher")


TICKERS_PATH = "api/tickers/"


class FetchError(Exception):
    """Any failure to obtain a ticker list: network, HTTP status or payload shape."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def tickers_url(base_url: str) -> str:
    return base_url.rstrip("/") + "/" + TICKERS_PATH


async def fetch_tickers(
    start: int = 0,
    limit: int = 100,
    *,
    base_url: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> TickerListResponse:
    """Return one page of CoinLore tickers parsed into a TickerListResponse."""

    if start < 0:
        raise ValueError(f"start must be >= 0, got {start}")
    if limit <= 0:
        raise ValueError(f"limit must be > 0, got {limit}")

    settings = get_settings()
    url = tickers_url(base_url or settings.COINLORE_BASE_URL)
    params = {"start": start, "limit": limit}
    headers = {"Accept": "application/json"}

    logger.debug("fetching tickers | url=%s start=%s limit=%s", url, start, limit)

    try:
        if client is not None:
            response = await client.get(url, params=params, headers=headers)
        else:
            client_timeout = settings.COINLORE_TIMEOUT_S if timeout is None else timeout
            async with httpx.AsyncClient(timeout=client_timeout) as own_client:
                response = await own_client.get(url, params=params, headers=headers)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as exc:
        logger.warning("ticker fetch failed | status=%s", exc.response.status_code)
        raise FetchError(f"CoinLore returned HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        logger.warning("ticker fetch failed | %s", exc)
        raise FetchError(f"Unable to reach CoinLore: {exc}") from exc
    except ValueError as exc:
        logger.warning("ticker fetch returned a non-JSON body")
        raise FetchError("CoinLore returned malformed JSON") from exc

    try:
        result = TickerListResponse.model_validate(payload)
    except ValidationError as exc:
        logger.warning("ticker payload rejected | errors=%s", exc.error_count())
        raise FetchError(f"Unexpected CoinLore payload: {exc.error_count()} invalid field(s)") from exc

    logger.info("tickers fetched | count=%s", len(result.data))
    return result
