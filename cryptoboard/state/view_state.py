# cryptoboard/state/view_state.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, List, Optional

from cryptoboard.schemas.tickers import Ticker, TickerFilter, TickerInfo, TickerListResponse
from cryptoboard.services.filter_engine import TOP_MOVERS_LIMIT, derive_display_list

logger = logging.getLogger("cryptoboard.view_state")


Observer = Callable[[str, Any], None]

GENERIC_FETCH_ERROR = "Failed to load tickers"


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class ViewState:
    """
    Observable state of the ticker screen.

    Holds the last fetched tickers, the loading flag, the last error and the
    selected filter. Every field change is pushed to subscribers as
    ``callback(field_name, new_value)``; assigning an equal value is silent.

    Only the event loop thread mutates it (the fetch task on completion and the
    request handlers), so there is no locking.

    Example:
        state = ViewState()
        unsubscribe = state.subscribe(lambda name, value: print(name, value))
        state.update_filter(TickerFilter.TOP_GAINERS)  # prints selected_filter ...
        rows = state.display_list("bt")
    """

    def __init__(self, top_movers_limit: int = TOP_MOVERS_LIMIT):
        self._tickers: List[Ticker] = []
        self._is_loading = False
        self._error: Optional[str] = None
        self._selected_filter = TickerFilter.ALL
        self._status = FetchStatus.IDLE
        self._info: Optional[TickerInfo] = None
        self._last_updated: Optional[datetime] = None
        self._observers: List[Observer] = []
        self.top_movers_limit = top_movers_limit

    # ----------------------------
    # observers
    # ----------------------------
    def subscribe(self, callback: Observer) -> Callable[[], None]:
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _notify(self, name: str, value: Any) -> None:
        for callback in list(self._observers):
            try:
                callback(name, value)
            except Exception:
                logger.exception("view state observer failed | field=%s", name)

    def _set(self, name: str, value: Any) -> None:
        attr = f"_{name}"
        if getattr(self, attr) == value:
            return
        setattr(self, attr, value)
        self._notify(name, value)

    # ----------------------------
    # fields
    # ----------------------------
    @property
    def tickers(self) -> List[Ticker]:
        return list(self._tickers)

    @tickers.setter
    def tickers(self, value: List[Ticker]) -> None:
        self._set("tickers", list(value))

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @is_loading.setter
    def is_loading(self, value: bool) -> None:
        self._set("is_loading", bool(value))

    @property
    def error(self) -> Optional[str]:
        return self._error

    @error.setter
    def error(self, value: Optional[str]) -> None:
        self._set("error", value)

    @property
    def selected_filter(self) -> TickerFilter:
        return self._selected_filter

    @selected_filter.setter
    def selected_filter(self, value: TickerFilter) -> None:
        self._set("selected_filter", TickerFilter(value))

    @property
    def status(self) -> FetchStatus:
        return self._status

    @status.setter
    def status(self, value: FetchStatus) -> None:
        self._set("status", FetchStatus(value))

    @property
    def info(self) -> Optional[TickerInfo]:
        return self._info

    @property
    def last_updated(self) -> Optional[datetime]:
        return self._last_updated

    # ----------------------------
    # transitions
    # ----------------------------
    def begin_fetch(self) -> None:
        self.error = None
        self.is_loading = True
        self.status = FetchStatus.LOADING

    def complete_fetch(self, response: TickerListResponse) -> None:
        self.tickers = response.data
        self._set("info", response.info)
        self._set("last_updated", datetime.now(timezone.utc))
        self.status = FetchStatus.SUCCESS
        self.is_loading = False

    def fail_fetch(self, message: Optional[str]) -> None:
        self.error = message.strip() if message and message.strip() else GENERIC_FETCH_ERROR
        self.status = FetchStatus.FAILURE
        self.is_loading = False

    def cancel_fetch(self) -> None:
        """An abandoned fetch returns to IDLE; a finished one keeps its outcome."""
        if self._status is FetchStatus.LOADING:
            self.status = FetchStatus.IDLE
        self.is_loading = False

    def update_filter(self, ticker_filter: TickerFilter) -> None:
        self.selected_filter = ticker_filter

    # ----------------------------
    # derived
    # ----------------------------
    def display_list(self, query: str = "", ticker_filter: Optional[TickerFilter] = None) -> List[Ticker]:
        return derive_display_list(
            self._tickers,
            query,
            ticker_filter or self._selected_filter,
            limit=self.top_movers_limit,
        )
