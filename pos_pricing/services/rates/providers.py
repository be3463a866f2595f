from __future__ import annotations

"""Concrete rate providers and factory.

'dolarvzla' reads the public DolarVzla exchange-rate endpoint; 'static' returns
the configured ``static_rate`` and is meant for offline/dev installs.
"""
from typing import Any, Dict, Optional

from pos_pricing.core.config import Settings, get_settings
from pos_pricing.services.http_client import get_json
from .base import RateProvider


class StaticRateProvider(RateProvider):
    name = "static"

    def __init__(self, rate: float):
        self._rate = rate

    def fetch_payload(self) -> Dict[str, Any]:  # type: ignore[override]
        return {"rate": self._rate, "date": None}


class DolarVzlaRateProvider(RateProvider):
    """HTTP provider; response shape ``{"current": {"usd", "date"}, "previous": {...}, ...}``."""

    name = "dolarvzla"

    def __init__(self, url: str, *, timeout: float = 5.0, retries: int = 2):
        self._url = url
        self._timeout = timeout
        self._retries = retries

    def fetch_payload(self) -> Dict[str, Any]:  # type: ignore[override]
        data = get_json(self._url, timeout=self._timeout, retries=self._retries)
        if not isinstance(data, dict):
            return {}
        current = _as_dict(data.get("current"))
        previous = _as_dict(data.get("previous"))
        change = _as_dict(data.get("changePercentage"))
        return {
            "rate": current.get("usd"),
            "date": current.get("date"),
            "previous": previous.get("usd"),
            "changePercentage": change.get("usd"),
        }


def _as_dict(value: Optional[Any]) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def make_rate_provider(kind: str, settings: Settings | None = None) -> RateProvider:
    settings = settings or get_settings()
    if kind == "static":
        return StaticRateProvider(settings.static_rate)
    if kind == "dolarvzla":
        return DolarVzlaRateProvider(
            str(settings.rate_provider_url),
            timeout=settings.http_timeout_seconds,
            retries=settings.http_retries,
        )
    raise ValueError(f"Unknown rate provider kind '{kind}'")
