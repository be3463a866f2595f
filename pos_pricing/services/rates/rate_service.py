from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Callable

from pos_pricing.core.config import Settings
from pos_pricing.core.errors import ValidationError
from pos_pricing.db.dal import Database
from pos_pricing.models.constants import RateSource
from pos_pricing.models.rates import ExchangeRate, utcnow
from .base import SupportsFetch
from .fetcher import RateFetcher, coerce_rate
from .providers import make_rate_provider
from .store import RateStore, SqliteRateStore

"""Single source of truth for the current exchange rate.

Purpose:
    Every screen (catalog, point of sale, statistics, reports) reads the rate
    through ``get_current()`` and never keeps its own copy beyond a render-time
    snapshot.

Design:
    - ``get_current()`` is a store read only; no network.
    - ``refresh()`` runs the blocking provider call in a worker thread and
      writes ``{rate, fetched, now}``. A ``FetchError`` leaves the slot as is.
    - ``set_manual()`` validates before writing ``{rate, manual, now}``.
    - Writes are ordered by request token: each refresh takes a token when it
      starts and is dropped on completion if a newer write (refresh or manual)
      has already landed. There is no cancellation; the stale result is simply
      not stored.
"""

logger = logging.getLogger("pos_pricing.rates.service")


def validate_manual_rate(rate: Any) -> float:
    value = coerce_rate(rate)
    if value is None:
        raise ValidationError(f"manual rate must be a finite number > 0, got {rate!r}")
    return value


class RateService:
    def __init__(
        self,
        store: RateStore,
        fetcher: SupportsFetch,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._store = store
        self._fetcher = fetcher
        self._clock = clock
        self._issued = 0  # last token handed out
        self._applied = 0  # token of the value currently in the store

    # Internal --------------------------------------------------
    def _next_token(self) -> int:
        self._issued += 1
        return self._issued

    def _write(self, value: ExchangeRate, token: int) -> None:
        self._store.write(value)
        self._applied = token

    # Public API -----------------------------------------------
    def get_current(self) -> ExchangeRate:
        return self._store.read() or ExchangeRate.unknown()

    async def refresh(self) -> ExchangeRate:
        token = self._next_token()
        quote = await asyncio.to_thread(self._fetcher.fetch)
        if token < self._applied:
            logger.info(
                "dropping stale refresh (token %d, applied %d)", token, self._applied
            )
            return self.get_current()
        value = ExchangeRate(
            rate=quote.rate, source=RateSource.FETCHED, captured_at=self._clock()
        )
        self._write(value, token)
        return value

    def set_manual(self, rate: Any) -> ExchangeRate:
        validated = validate_manual_rate(rate)
        value = ExchangeRate(
            rate=validated, source=RateSource.MANUAL, captured_at=self._clock()
        )
        self._write(value, self._next_token())
        logger.info("manual rate set to %s", validated)
        return value


def build_rate_service(settings: Settings) -> RateService:
    """Wire the SQLite slot and the configured provider."""
    store = SqliteRateStore(Database(settings.db_path), key=settings.rate_slot_key)
    fetcher = RateFetcher(make_rate_provider(settings.rate_provider, settings))
    return RateService(store, fetcher)
