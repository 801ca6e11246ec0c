# cryptoboard/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cryptoboard.api.health import router as health_router
from cryptoboard.api.tickers import router as tickers_router

from cryptoboard.config.settings import get_settings
from cryptoboard.jobs.initial_fetch import start_initial_fetch, stop_initial_fetch
from cryptoboard.state.view_state import ViewState


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    # One view state per app lifetime, populated by exactly one fetch
    app.state.view_state = ViewState(top_movers_limit=settings.TOP_MOVERS_LIMIT)

    if settings.FETCH_ON_STARTUP:
        start_initial_fetch(app.state.view_state)

    yield

    await stop_initial_fetch()
    app.state.view_state = None


app = FastAPI(title="Crypto Ticker Board", lifespan=lifespan)

# Routers
app.include_router(health_router)
app.include_router(tickers_router)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Crypto Ticker Board"}
