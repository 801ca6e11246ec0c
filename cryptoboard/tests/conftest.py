from __future__ import annotations

import pytest

from cryptoboard.config import settings as settings_module
from cryptoboard.jobs import initial_fetch


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for key in (
        "COINLORE_BASE_URL",
        "COINLORE_TIMEOUT_S",
        "TICKERS_START",
        "TICKERS_LIMIT",
        "TOP_MOVERS_LIMIT",
        "FETCH_ON_STARTUP",
        "ICON_URL_TEMPLATE",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    settings_module.reset_settings()
    yield
    settings_module.reset_settings()


@pytest.fixture(autouse=True)
def _fresh_fetch_job():
    initial_fetch._job.task = None
    initial_fetch._job.state = None
    yield
    initial_fetch._job.task = None
    initial_fetch._job.state = None
