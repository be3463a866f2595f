from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from pos_pricing.models.constants import Direction
from pos_pricing.models.product import PricedProduct, ProductPricing
from pos_pricing.services.converter import (
    ConverterState,
    format_foreign,
    format_local,
    toggle_direction,
)
from pos_pricing.services.pricing import price_product
from pos_pricing.services.rates.rate_service import RateService
from .deps import get_rate_service

router = APIRouter(prefix="/pricing", tags=["pricing"])


class QuoteOut(PricedProduct):
    display_foreign: str
    display_local: str


class ConvertIn(BaseModel):
    amount: float = Field(..., description="Amount in the source currency")
    direction: Direction = Direction.FOREIGN_TO_LOCAL
    rate: Optional[float] = Field(
        None, description="Rate snapshot; defaults to the current cached rate"
    )


class ConvertOut(BaseModel):
    amount: float
    direction: Direction
    rate: Optional[float]
    result: Optional[float]
    available: bool
    display: str

    @classmethod
    def from_state(cls, state: ConverterState) -> "ConvertOut":
        return cls(
            amount=state.amount,
            direction=state.direction,
            rate=state.rate,
            result=state.result,
            available=state.result is not None,
            display=state.formatted_result(),
        )


class ToggleIn(BaseModel):
    amount: float
    direction: Direction
    rate: Optional[float] = None
    result: Optional[float] = None


@router.post("/quote", response_model=QuoteOut, summary="Sale prices at the current rate")
async def quote(product: ProductPricing, svc: RateService = Depends(get_rate_service)):
    priced = price_product(product, svc.get_current().rate)
    return QuoteOut(
        **priced.model_dump(),
        display_foreign=format_foreign(priced.sale_price_foreign),
        display_local=format_local(priced.sale_price_local),
    )


@router.post("/convert", response_model=ConvertOut, summary="Convert an amount")
async def convert_amount(payload: ConvertIn, svc: RateService = Depends(get_rate_service)):
    rate = payload.rate if payload.rate is not None else svc.get_current().rate
    return ConvertOut.from_state(
        ConverterState.start(payload.amount, rate, payload.direction)
    )


@router.post(
    "/convert/toggle",
    response_model=ConvertOut,
    summary="Flip conversion direction, seeding input with the prior result",
)
async def toggle(payload: ToggleIn, svc: RateService = Depends(get_rate_service)):
    rate = payload.rate if payload.rate is not None else svc.get_current().rate
    state = ConverterState(
        amount=payload.amount,
        rate=rate,
        direction=payload.direction,
        result=payload.result,
    )
    return ConvertOut.from_state(toggle_direction(state))
