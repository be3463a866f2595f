from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .constants import PAYMENT_METHODS
from .product import ProductPricing


class CartLine(BaseModel):
    product: ProductPricing
    quantity: float = Field(..., gt=0)  # units, kg or m2 depending on sale_unit


class SaleRecord(BaseModel):
    """Completed sale as stored by the sales screen."""

    total_foreign: Optional[float] = None
    total_local: Optional[float] = None
    rate: Optional[float] = None
    payment_method: str = "cash"
    created_at: datetime

    @field_validator("payment_method")
    def valid_method(cls, v: str) -> str:
        if v not in PAYMENT_METHODS:
            raise ValueError("unsupported payment method")
        return v
