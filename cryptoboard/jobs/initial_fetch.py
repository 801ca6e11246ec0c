# cryptoboard/jobs/initial_fetch.py
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from cryptoboard.config.settings import get_settings
from cryptoboard.schemas.tickers import TickerListResponse
from cryptoboard.services.coinlore import FetchError, fetch_tickers
from cryptoboard.state.view_state import FetchStatus, ViewState

logger = logging.getLogger("cryptoboard.initial_fetch")

Fetcher = Callable[..., Awaitable[TickerListResponse]]

TASK_NAME = "initial-ticker-fetch"


@dataclass
class _FetchJobState:
    task: Optional[asyncio.Task] = None
    state: Optional[ViewState] = None


_job = _FetchJobState()


# ----------------------------
# single fetch
# ----------------------------
async def load_tickers(
    state: ViewState,
    fetcher: Fetcher = fetch_tickers,
    *,
    start: Optional[int] = None,
    limit: Optional[int] = None,
) -> FetchStatus:
    """Run one LOADING -> SUCCESS/FAILURE cycle against ``state``. Never raises FetchError."""
    settings = get_settings()
    start = settings.TICKERS_START if start is None else start
    limit = settings.TICKERS_LIMIT if limit is None else limit

    state.begin_fetch()
    t0 = time.perf_counter()

    try:
        response = await fetcher(start=start, limit=limit)
    except FetchError as exc:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        state.fail_fetch(exc.message)
        logger.warning("initial fetch failed | %s | %dms", exc.message, dt_ms)
        return state.status
    except asyncio.CancelledError:
        state.cancel_fetch()
        raise
    except Exception as exc:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        state.fail_fetch(str(exc))
        logger.exception("initial fetch error | %dms", dt_ms)
        return state.status

    dt_ms = int((time.perf_counter() - t0) * 1000)
    state.complete_fetch(response)
    logger.info("initial fetch done | tickers=%s | %dms", len(response.data), dt_ms)
    return state.status


# ----------------------------
# task lifecycle
# ----------------------------
def start_initial_fetch(state: ViewState, fetcher: Fetcher = fetch_tickers) -> asyncio.Task:
    """Schedule the one startup fetch. A pending task is reused, never duplicated."""
    if _job.task is not None and not _job.task.done():
        logger.warning("initial fetch already in flight")
        return _job.task

    _job.state = state
    _job.task = asyncio.create_task(load_tickers(state, fetcher), name=TASK_NAME)
    return _job.task


def current_task() -> Optional[asyncio.Task]:
    return _job.task


async def stop_initial_fetch() -> None:
    task = _job.task
    if task is None:
        return

    if not task.done():
        task.cancel()
        logger.info("initial fetch cancelled")
    await asyncio.gather(task, return_exceptions=True)

    if _job.state is not None:
        _job.state.cancel_fetch()
    _job.task = None
    _job.state = None
