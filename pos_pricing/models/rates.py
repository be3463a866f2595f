from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import RateSource


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExchangeRate(BaseModel):
    """Local currency units per one unit of foreign currency.

    ``rate == 0`` is the sentinel for "not yet known"; any other value is a
    finite positive number.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rate: float = Field(0.0, ge=0)
    source: RateSource = RateSource.FETCHED
    captured_at: datetime = Field(default_factory=utcnow, alias="capturedAt")

    @field_validator("rate")
    @classmethod
    def finite_rate(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("rate must be finite")
        return v

    @property
    def is_known(self) -> bool:
        return self.rate > 0

    @classmethod
    def unknown(cls) -> "ExchangeRate":
        return cls(rate=0.0)

    def to_slot(self) -> str:
        return self.model_dump_json(by_alias=True)


class RateQuote(BaseModel):
    """Normalized upstream response; only ``rate`` is guaranteed."""

    rate: float = Field(..., gt=0)
    previous: Optional[float] = None
    change_percentage: Optional[float] = None
    published_at: Optional[str] = None
    fetched_at: datetime = Field(default_factory=utcnow)

    @field_validator("rate")
    @classmethod
    def finite_rate(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("rate must be finite")
        return v
