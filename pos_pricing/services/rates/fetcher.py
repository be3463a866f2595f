from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

from pos_pricing.core.errors import FetchError
from pos_pricing.models.rates import RateQuote
from pos_pricing.services.http_client import HttpError
from .base import RateProvider

logger = logging.getLogger("pos_pricing.rates.fetcher")


def coerce_rate(value: Any) -> Optional[float]:
    """Return ``value`` as a finite positive float, or None when unusable.

    Numeric strings are accepted because providers often quote as text.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


def _optional_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def parse_rate_payload(payload: Any) -> RateQuote:
    if not isinstance(payload, dict):
        raise FetchError("rate provider returned a non-object payload")
    rate = coerce_rate(payload.get("rate"))
    if rate is None:
        raise FetchError("rate provider response has no usable numeric rate")
    published = payload.get("date")
    return RateQuote(
        rate=rate,
        previous=_optional_number(payload.get("previous")),
        change_percentage=_optional_number(payload.get("changePercentage")),
        published_at=str(published) if published is not None else None,
    )


class RateFetcher:
    """Calls a provider and normalizes its answer into a ``RateQuote``."""

    def __init__(self, provider: RateProvider):
        self._provider = provider

    @property
    def provider_name(self) -> str:
        return self._provider.name

    def fetch(self) -> RateQuote:
        try:
            payload: Dict[str, Any] = self._provider.fetch_payload()
        except HttpError as e:
            raise FetchError(f"rate provider '{self.provider_name}' unreachable: {e}") from e
        quote = parse_rate_payload(payload)
        logger.info(
            "fetched rate %s from %s (published %s)",
            quote.rate,
            self.provider_name,
            quote.published_at or "-",
        )
        return quote
