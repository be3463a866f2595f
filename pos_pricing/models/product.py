from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .constants import SaleUnit


class ProductPricing(BaseModel):
    """Pricing attributes of a catalog product.

    ``profit_setting`` accepts either a fraction (0.30) or a whole percentage
    (30); see ``services.pricing.normalize_profit``.
    """

    cost_foreign: float = Field(..., ge=0)
    profit_setting: float = Field(0, ge=0)
    sale_unit: SaleUnit = SaleUnit.UNIT


class PricedProduct(BaseModel):
    cost_foreign: float
    profit_fraction: float
    sale_unit: SaleUnit
    rate: float
    sale_price_foreign: float
    sale_price_local: Optional[float] = None  # None while the rate is unknown
