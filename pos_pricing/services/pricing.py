from __future__ import annotations

import math
from typing import Optional

from pos_pricing.models.product import PricedProduct, ProductPricing
from pos_pricing.services.converter import to_local

"""Sale price derivation.

Operators type profit either as a fraction ("0.30") or as a whole percentage
("30"); both mean a 30% markup. Values above 1 are read as percentages, values
up to and including 1 as fractions, so "1" is a 100% markup.

Sale prices are never stored. They are recomputed from cost, profit and the
current rate so they cannot drift from rate changes.
"""


def normalize_profit(profit_setting: Optional[float]) -> float:
    if profit_setting is None:
        return 0.0
    try:
        value = float(profit_setting)
    except (TypeError, ValueError):
        return 0.0
    fraction = value / 100 if value > 1 else value
    if not math.isfinite(fraction) or fraction < 0:
        return 0.0
    return fraction


def compute_sale_price(cost_foreign: float, profit_setting: Optional[float]) -> float:
    try:
        price = float(cost_foreign) * (1 + normalize_profit(profit_setting))
    except (TypeError, ValueError):
        return 0.0
    return price if math.isfinite(price) else 0.0


def price_product(product: ProductPricing, rate: float) -> PricedProduct:
    sale_foreign = compute_sale_price(product.cost_foreign, product.profit_setting)
    return PricedProduct(
        cost_foreign=product.cost_foreign,
        profit_fraction=normalize_profit(product.profit_setting),
        sale_unit=product.sale_unit,
        rate=rate,
        sale_price_foreign=sale_foreign,
        sale_price_local=to_local(sale_foreign, rate),
    )
