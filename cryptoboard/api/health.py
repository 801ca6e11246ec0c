# cryptoboard/api/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response

from cryptoboard.api.tickers import get_view_state
from cryptoboard.state.view_state import FetchStatus, ViewState

router = APIRouter(tags=["health"])

APP_STARTED_AT = time.time()

_DEGRADED_REASONS = {
    FetchStatus.IDLE: "idle",
    FetchStatus.LOADING: "loading",
    FetchStatus.FAILURE: "fetch_failed",
}


def _now_meta() -> Dict[str, Any]:
    now_ts = time.time()
    now_dt = datetime.fromtimestamp(now_ts, tz=timezone.utc)
    return {
        "now_unix": int(now_ts),
        "now_iso": now_dt.isoformat().replace("+00:00", "Z"),
        "uptime_s": int(now_ts - APP_STARTED_AT),
    }


def _check_tickers(state: ViewState) -> Dict[str, Any]:
    return {
        "ok": state.status is FetchStatus.SUCCESS,
        "status": state.status.value,
        "ticker_count": len(state.tickers),
        "error": state.error,
    }


# ----------------------------
# Endpoints
# ----------------------------
@router.get("/live")
async def live():
    return {"status": "ok"}


@router.get("/ready")
async def ready(response: Response, state: ViewState = Depends(get_view_state)):
    check = _check_tickers(state)
    payload: Dict[str, Any] = {"status": "ok", **_now_meta(), "checks": {"tickers": check}}

    if not check["ok"]:
        payload["status"] = "degraded"
        payload["reason"] = _DEGRADED_REASONS[state.status]
        response.status_code = 503

    return payload
