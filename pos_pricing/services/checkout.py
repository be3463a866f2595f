from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from pos_pricing.models.constants import DISCOUNTED_PAYMENT_METHODS
from pos_pricing.models.sales import CartLine
from pos_pricing.services.converter import to_foreign, to_local
from pos_pricing.services.money import round2
from pos_pricing.services.pricing import compute_sale_price

"""Point-of-sale totals.

Scopes implemented:
    - Line totals (unit price * quantity) in both currencies
    - Cart totals with the cash-payment discount
    - Mixed payments (part foreign, part local): remaining amounts and balance check

Local-currency values are None while the rate is the unknown sentinel; the
sales screen disables checkout in that state.
"""


@dataclass(frozen=True)
class LineTotal:
    unit_price_foreign: float
    quantity: float
    total_foreign: float
    total_local: Optional[float]


@dataclass(frozen=True)
class CartTotals:
    lines: List[LineTotal]
    base_total_foreign: float
    discount_fraction: float
    discount_foreign: float
    total_foreign: float
    total_local: Optional[float]
    rate: float

    @property
    def ready(self) -> bool:
        return self.total_local is not None or self.total_foreign == 0


def compute_line_total(line: CartLine, rate: float) -> LineTotal:
    unit = compute_sale_price(line.product.cost_foreign, line.product.profit_setting)
    total = unit * line.quantity
    return LineTotal(
        unit_price_foreign=unit,
        quantity=line.quantity,
        total_foreign=total,
        total_local=to_local(total, rate),
    )


def discount_for(payment_method: str, cash_discount_fraction: float) -> float:
    if payment_method in DISCOUNTED_PAYMENT_METHODS:
        return cash_discount_fraction
    return 0.0


def compute_cart_totals(
    lines: Iterable[CartLine],
    rate: float,
    payment_method: str,
    cash_discount_fraction: float = 0.30,
) -> CartTotals:
    line_totals = [compute_line_total(line, rate) for line in lines]
    base = sum(lt.total_foreign for lt in line_totals)
    discount = discount_for(payment_method, cash_discount_fraction)
    total_foreign = base * (1 - discount)
    return CartTotals(
        lines=line_totals,
        base_total_foreign=base,
        discount_fraction=discount,
        discount_foreign=base * discount,
        total_foreign=total_foreign,
        total_local=to_local(total_foreign, rate),
        rate=rate,
    )


# ---------------- Mixed payments -----------------


def remaining_local_after_foreign(
    total_local: float, paid_foreign: float, rate: float
) -> Optional[float]:
    """Local amount still due after ``paid_foreign`` (clamped at 0)."""
    if to_local(1.0, rate) is None:
        return None
    return max(total_local - paid_foreign * rate, 0.0)


def remaining_foreign_after_local(
    total_local: float, paid_local: float, rate: float
) -> Optional[float]:
    """Foreign amount still due after ``paid_local`` (clamped at 0)."""
    remaining_local = total_local - paid_local
    if remaining_local <= 0:
        return 0.0 if to_local(1.0, rate) is not None else None
    return to_foreign(remaining_local, rate)


def mixed_payment_balances(
    total_local: float, paid_foreign: float, paid_local: float, rate: float
) -> bool:
    """True when both parts add up to the total at cent precision."""
    if to_local(1.0, rate) is None:
        return False
    combined = paid_foreign * rate + paid_local
    return round2(combined) == round2(total_local)
