from __future__ import annotations

"""Durable single-slot storage for the current exchange rate.

The slot holds JSON ``{"rate", "source", "capturedAt"}``. Readers never see
corruption: an absent, unparsable or invalid slot reads as ``None`` and the
rate service substitutes the zero-rate sentinel.
"""
import json
import logging
from typing import Optional, Protocol, TYPE_CHECKING

import pydantic

from pos_pricing.models.rates import ExchangeRate

if TYPE_CHECKING:  # pragma: no cover
    from pos_pricing.db.dal import Database

logger = logging.getLogger("pos_pricing.rates.store")


class RateStore(Protocol):
    def read(self) -> Optional[ExchangeRate]: ...

    def write(self, rate: ExchangeRate) -> None: ...


def decode_slot(raw: Optional[str]) -> Optional[ExchangeRate]:
    if not raw:
        return None
    try:
        data = json.loads(raw)
        return ExchangeRate.model_validate(data)
    except (ValueError, pydantic.ValidationError) as e:
        logger.warning("ignoring corrupt rate slot: %s", e)
        return None


class SqliteRateStore:
    """Stores the slot in the ``metadata`` table under ``key``."""

    def __init__(self, db: "Database", key: str = "exchange_rate"):
        self._db = db
        self._key = key

    def read(self) -> Optional[ExchangeRate]:
        return decode_slot(self._db.get_metadata(self._key))

    def write(self, rate: ExchangeRate) -> None:
        self._db.set_metadata(self._key, rate.to_slot())


class MemoryRateStore:
    """Process-local store; keeps the serialized form so reads round-trip like the DB."""

    def __init__(self, raw: Optional[str] = None):
        self.raw = raw

    def read(self) -> Optional[ExchangeRate]:
        return decode_slot(self.raw)

    def write(self, rate: ExchangeRate) -> None:
        self.raw = rate.to_slot()
