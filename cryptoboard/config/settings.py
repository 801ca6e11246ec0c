# cryptoboard/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass


DEFAULT_BASE_URL = "https://api.coinlore.com/"
DEFAULT_ICON_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/spothq/cryptocurrency-icons/master/128/color/{symbol}.png"
)


def parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_int(value: str | None, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    return int(value)


def parse_float(value: str | None, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    return float(value)


def parse_str(value: str | None, default: str) -> str:
    if value is None or value.strip() == "":
        return default
    return value.strip()


@dataclass(frozen=True)
class Settings:
    COINLORE_BASE_URL: str
    COINLORE_TIMEOUT_S: float
    TICKERS_START: int
    TICKERS_LIMIT: int
    TOP_MOVERS_LIMIT: int
    FETCH_ON_STARTUP: bool
    ICON_URL_TEMPLATE: str
    LOG_LEVEL: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            COINLORE_BASE_URL=parse_str(os.getenv("COINLORE_BASE_URL"), DEFAULT_BASE_URL),
            COINLORE_TIMEOUT_S=parse_float(os.getenv("COINLORE_TIMEOUT_S"), 10.0),
            TICKERS_START=parse_int(os.getenv("TICKERS_START"), 0),
            TICKERS_LIMIT=parse_int(os.getenv("TICKERS_LIMIT"), 100),
            TOP_MOVERS_LIMIT=parse_int(os.getenv("TOP_MOVERS_LIMIT"), 10),
            FETCH_ON_STARTUP=parse_bool(os.getenv("FETCH_ON_STARTUP"), True),
            ICON_URL_TEMPLATE=parse_str(os.getenv("ICON_URL_TEMPLATE"), DEFAULT_ICON_URL_TEMPLATE),
            LOG_LEVEL=parse_str(os.getenv("LOG_LEVEL"), "INFO").upper(),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
