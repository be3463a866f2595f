from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from pos_pricing.core.config import Settings
from pos_pricing.models.constants import PAYMENT_METHODS
from pos_pricing.models.sales import CartLine
from pos_pricing.services.checkout import (
    compute_cart_totals,
    mixed_payment_balances,
    remaining_foreign_after_local,
    remaining_local_after_foreign,
)
from pos_pricing.services.money import round2
from pos_pricing.services.rates.rate_service import RateService
from .deps import get_app_settings, get_rate_service

router = APIRouter(prefix="/checkout", tags=["checkout"])


def _r(value: Optional[float]) -> Optional[float]:
    return round2(value) if value is not None else None


class CartIn(BaseModel):
    lines: List[CartLine] = Field(..., min_length=1)
    payment_method: str = "cash"

    @field_validator("payment_method")
    def valid_method(cls, v: str) -> str:
        if v not in PAYMENT_METHODS:
            raise ValueError("unsupported payment method")
        return v


class LineOut(BaseModel):
    unit_price_foreign: float
    quantity: float
    total_foreign: float
    total_local: Optional[float]


class CartOut(BaseModel):
    lines: List[LineOut]
    rate: float
    base_total_foreign: float
    discount_fraction: float
    discount_foreign: float
    total_foreign: float
    total_local: Optional[float]
    ready: bool


class MixedIn(BaseModel):
    total_local: float = Field(..., ge=0)
    paid_foreign: float = Field(0, ge=0)
    paid_local: float = Field(0, ge=0)


class MixedOut(BaseModel):
    rate: float
    remaining_local_after_foreign: Optional[float]
    remaining_foreign_after_local: Optional[float]
    balanced: bool


@router.post("/totals", response_model=CartOut, summary="Cart totals at the current rate")
async def cart_totals(
    payload: CartIn,
    svc: RateService = Depends(get_rate_service),
    settings: Settings = Depends(get_app_settings),
):
    totals = compute_cart_totals(
        payload.lines,
        svc.get_current().rate,
        payload.payment_method,
        settings.cash_discount_fraction,
    )
    return CartOut(
        lines=[
            LineOut(
                unit_price_foreign=round2(lt.unit_price_foreign),
                quantity=lt.quantity,
                total_foreign=round2(lt.total_foreign),
                total_local=_r(lt.total_local),
            )
            for lt in totals.lines
        ],
        rate=totals.rate,
        base_total_foreign=round2(totals.base_total_foreign),
        discount_fraction=totals.discount_fraction,
        discount_foreign=round2(totals.discount_foreign),
        total_foreign=round2(totals.total_foreign),
        total_local=_r(totals.total_local),
        ready=totals.ready,
    )


@router.post("/mixed", response_model=MixedOut, summary="Split a payment across currencies")
async def mixed_payment(payload: MixedIn, svc: RateService = Depends(get_rate_service)):
    rate = svc.get_current().rate
    if rate <= 0:
        raise HTTPException(status_code=409, detail="exchange rate not yet known")
    return MixedOut(
        rate=rate,
        remaining_local_after_foreign=_r(
            remaining_local_after_foreign(payload.total_local, payload.paid_foreign, rate)
        ),
        remaining_foreign_after_local=_r(
            remaining_foreign_after_local(payload.total_local, payload.paid_local, rate)
        ),
        balanced=mixed_payment_balances(
            payload.total_local, payload.paid_foreign, payload.paid_local, rate
        ),
    )
