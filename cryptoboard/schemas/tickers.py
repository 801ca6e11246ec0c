"""Pydantic models for the CoinLore ticker payload and the screen responses."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TickerFilter(str, Enum):
    ALL = "all"
    TOP_GAINERS = "top_gainers"
    TOP_LOSERS = "top_losers"


class Ticker(BaseModel):
    """One cryptocurrency row as returned by /api/tickers/."""

    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    symbol: str
    name: str

    # CoinLore sends these as numeric strings; lax mode coerces them.
    price_usd: float
    percent_change_24h: float
    market_cap_usd: float

    @field_validator("price_usd", "percent_change_24h", "market_cap_usd", mode="before")
    @classmethod
    def reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("expected a number, got a boolean")
        return value


class TickerInfo(BaseModel):
    coins_num: int
    time: int


class TickerListResponse(BaseModel):
    """Canonical body of GET /api/tickers/."""

    data: List[Ticker]
    info: TickerInfo


class TickerView(Ticker):
    """A ticker as shown on the screen, with its resolved icon."""

    icon_url: str


class ScreenResponse(BaseModel):
    """Everything a UI needs to render the ticker list in one payload."""

    status: str
    is_loading: bool
    error: Optional[str] = None
    selected_filter: TickerFilter
    applied_filter: TickerFilter
    query: str = ""
    count: int = 0
    items: List[TickerView] = Field(default_factory=list)
    last_updated: Optional[datetime] = None


class StateResponse(BaseModel):
    status: str
    is_loading: bool
    error: Optional[str] = None
    selected_filter: TickerFilter
    ticker_count: int
    info: Optional[TickerInfo] = None
    last_updated: Optional[datetime] = None


class FilterUpdate(BaseModel):
    """Body for PUT /tickers/filter."""

    filter: TickerFilter = Field(..., description="One of all, top_gainers, top_losers")
