from __future__ import annotations

from cryptoboard.schemas.tickers import TickerFilter, TickerInfo, TickerListResponse
from cryptoboard.state.view_state import GENERIC_FETCH_ERROR, FetchStatus, ViewState
from cryptoboard.tests.factories import make_ticker


def _response(*tickers) -> TickerListResponse:
    return TickerListResponse(data=list(tickers), info=TickerInfo(coins_num=len(tickers), time=1700000000))


def test_initial_state():
    state = ViewState()
    assert state.tickers == []
    assert state.is_loading is False
    assert state.error is None
    assert state.selected_filter is TickerFilter.ALL
    assert state.status is FetchStatus.IDLE
    assert state.last_updated is None


def test_success_transition_replaces_tickers():
    state = ViewState()
    state.begin_fetch()
    assert state.is_loading is True
    assert state.status is FetchStatus.LOADING

    state.complete_fetch(_response(make_ticker("BTC", 1.0)))
    state.begin_fetch()
    state.complete_fetch(_response(make_ticker("ETH", 2.0), make_ticker("XRP", 3.0)))

    assert [t.symbol for t in state.tickers] == ["ETH", "XRP"]
    assert state.is_loading is False
    assert state.error is None
    assert state.status is FetchStatus.SUCCESS
    assert state.info.coins_num == 2
    assert state.last_updated is not None
    assert state.last_updated.tzinfo is not None


def test_failure_keeps_tickers_and_stops_loading():
    state = ViewState()
    state.begin_fetch()
    state.complete_fetch(_response(make_ticker("BTC", 1.0)))

    state.begin_fetch()
    state.fail_fetch("CoinLore returned HTTP 500")

    assert state.error == "CoinLore returned HTTP 500"
    assert state.is_loading is False
    assert state.status is FetchStatus.FAILURE
    assert [t.symbol for t in state.tickers] == ["BTC"]


def test_new_attempt_clears_error():
    state = ViewState()
    state.fail_fetch("nope")
    state.begin_fetch()
    assert state.error is None


def test_blank_failure_message_gets_generic_text():
    state = ViewState()
    state.fail_fetch("")
    assert state.error == GENERIC_FETCH_ERROR
    state.fail_fetch(None)
    assert state.error == GENERIC_FETCH_ERROR


def test_observers_receive_changes_and_can_unsubscribe():
    state = ViewState()
    events = []
    unsubscribe = state.subscribe(lambda name, value: events.append((name, value)))

    state.update_filter(TickerFilter.TOP_LOSERS)
    state.update_filter(TickerFilter.TOP_LOSERS)  # unchanged, silent
    assert events == [("selected_filter", TickerFilter.TOP_LOSERS)]

    unsubscribe()
    state.update_filter(TickerFilter.ALL)
    assert len(events) == 1


def test_begin_fetch_notifies_in_order():
    state = ViewState()
    names = []
    state.subscribe(lambda name, value: names.append(name))
    state.begin_fetch()
    assert names == ["is_loading", "status"]


def test_failing_observer_does_not_block_others():
    state = ViewState()
    seen = []

    def broken(name, value):
        raise RuntimeError("observer bug")

    state.subscribe(broken)
    state.subscribe(lambda name, value: seen.append(name))

    state.update_filter(TickerFilter.TOP_GAINERS)
    assert state.selected_filter is TickerFilter.TOP_GAINERS
    assert seen == ["selected_filter"]


def test_tickers_getter_returns_copy():
    state = ViewState()
    state.complete_fetch(_response(make_ticker("BTC", 1.0)))
    state.tickers.clear()
    assert len(state.tickers) == 1


def test_display_list_uses_selected_filter():
    state = ViewState(top_movers_limit=2)
    state.complete_fetch(
        _response(make_ticker("BTC", 5.0), make_ticker("ETH", -2.0), make_ticker("XRP", 10.0))
    )

    assert [t.symbol for t in state.display_list()] == ["BTC", "ETH", "XRP"]

    state.update_filter(TickerFilter.TOP_GAINERS)
    assert [t.symbol for t in state.display_list()] == ["XRP", "BTC"]

    state.update_filter(TickerFilter.TOP_LOSERS)
    assert [t.symbol for t in state.display_list("x")] == ["XRP"]


def test_cancel_fetch_returns_loading_state_to_idle():
    state = ViewState()
    state.begin_fetch()
    state.cancel_fetch()
    assert state.status is FetchStatus.IDLE
    assert state.is_loading is False


def test_cancel_fetch_keeps_finished_outcome():
    state = ViewState()
    state.begin_fetch()
    state.complete_fetch(_response(make_ticker("BTC", 1.0)))
    state.cancel_fetch()
    assert state.status is FetchStatus.SUCCESS
    assert [t.symbol for t in state.tickers] == ["BTC"]


def test_display_list_override_does_not_change_selection():
    state = ViewState()
    state.complete_fetch(_response(make_ticker("BTC", 5.0), make_ticker("XRP", 10.0)))
    assert [t.symbol for t in state.display_list("", TickerFilter.TOP_GAINERS)] == ["XRP", "BTC"]
    assert state.selected_filter is TickerFilter.ALL
