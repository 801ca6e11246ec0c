from __future__ import annotations

from typing import Optional

from cryptoboard.config.settings import get_settings


def icon_url(symbol: str, template: Optional[str] = None) -> str:
    """Resolve the 128px colour icon for a ticker symbol."""
    template = template or get_settings().ICON_URL_TEMPLATE
    return template.format(symbol=symbol.strip().lower())
