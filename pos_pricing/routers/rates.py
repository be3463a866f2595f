from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from pos_pricing.core.config import Settings
from pos_pricing.models.constants import FOREIGN_CURRENCY, LOCAL_CURRENCY, RateSource
from pos_pricing.models.rates import ExchangeRate
from pos_pricing.services.converter import format_local
from pos_pricing.services.rates.rate_service import RateService
from .deps import get_app_settings, get_rate_service

"""Rates router.

Endpoints:
    - GET /rates/current   -> cached rate, no network
    - POST /rates/refresh  -> fetch from provider and store (502 on FetchError)
    - PUT /rates/manual    -> store an operator-entered rate (guarded by
      settings.enable_rate_override; 400 on invalid rate)
"""

router = APIRouter(prefix="/rates", tags=["rates"])


def require_override_enabled(settings: Settings = Depends(get_app_settings)):
    if not settings.enable_rate_override:
        raise HTTPException(status_code=403, detail="manual rate entry disabled")
    return True


class RateOut(BaseModel):
    pair: str = f"{FOREIGN_CURRENCY}/{LOCAL_CURRENCY}"
    rate: float
    source: RateSource
    captured_at: datetime
    known: bool
    display: str

    @classmethod
    def from_rate(cls, value: ExchangeRate) -> "RateOut":
        return cls(
            rate=value.rate,
            source=value.source,
            captured_at=value.captured_at,
            known=value.is_known,
            display=format_local(value.rate if value.is_known else None),
        )


class ManualRateIn(BaseModel):
    # Validated by the service so non-positive values map to a domain error.
    rate: float | str = Field(..., description="Local currency per 1 unit of foreign")


@router.get("/current", response_model=RateOut, summary="Current cached rate")
async def current_rate(svc: RateService = Depends(get_rate_service)):
    return RateOut.from_rate(svc.get_current())


@router.post("/refresh", response_model=RateOut, summary="Fetch rate from provider")
async def refresh_rate(svc: RateService = Depends(get_rate_service)):
    return RateOut.from_rate(await svc.refresh())


@router.put("/manual", response_model=RateOut, summary="Set rate manually")
async def set_manual_rate(
    payload: ManualRateIn,
    _: bool = Depends(require_override_enabled),
    svc: RateService = Depends(get_rate_service),
):
    return RateOut.from_rate(svc.set_manual(payload.rate))
