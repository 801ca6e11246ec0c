# cryptoboard/api/tickers.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from cryptoboard.schemas.tickers import (
    FilterUpdate,
    ScreenResponse,
    StateResponse,
    Ticker,
    TickerFilter,
    TickerView,
)
from cryptoboard.services.icons import icon_url
from cryptoboard.state.view_state import ViewState

router = APIRouter(prefix="/tickers", tags=["tickers"])


def get_view_state(request: Request) -> ViewState:
    state = getattr(request.app.state, "view_state", None)
    if state is None:
        state = ViewState()
        request.app.state.view_state = state
    return state


def _to_view(ticker: Ticker) -> TickerView:
    return TickerView(**ticker.model_dump(), icon_url=icon_url(ticker.symbol))


def _screen(state: ViewState, query: str, ticker_filter: Optional[TickerFilter] = None) -> ScreenResponse:
    applied = ticker_filter or state.selected_filter

    # list, spinner and error message are mutually exclusive on screen
    items: List[TickerView] = []
    if not state.is_loading and state.error is None:
        items = [_to_view(t) for t in state.display_list(query, applied)]

    return ScreenResponse(
        status=state.status.value,
        is_loading=state.is_loading,
        error=state.error,
        selected_filter=state.selected_filter,
        applied_filter=applied,
        query=query,
        count=len(items),
        items=items,
        last_updated=state.last_updated,
    )


@router.get("", response_model=ScreenResponse)
async def get_tickers(
    q: str = Query("", description="Case-insensitive match on name or symbol"),
    ticker_filter: Optional[TickerFilter] = Query(None, alias="filter"),
    state: ViewState = Depends(get_view_state),
) -> ScreenResponse:
    """
    Derived ticker list for a search string.

    ``filter`` overrides the selected filter for this read only; the stored
    selection changes through PUT /tickers/filter.
    Example: /tickers?q=bt&filter=top_gainers
    """
    return _screen(state, q, ticker_filter)


@router.put("/filter", response_model=ScreenResponse)
async def put_filter(payload: FilterUpdate, state: ViewState = Depends(get_view_state)) -> ScreenResponse:
    state.update_filter(payload.filter)
    return _screen(state, "")


@router.get("/state", response_model=StateResponse)
async def get_state(state: ViewState = Depends(get_view_state)) -> StateResponse:
    return StateResponse(
        status=state.status.value,
        is_loading=state.is_loading,
        error=state.error,
        selected_filter=state.selected_filter,
        ticker_count=len(state.tickers),
        info=state.info,
        last_updated=state.last_updated,
    )
