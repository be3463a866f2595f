"""Bidirectional foreign/local conversion and amount formatting.

Both conversions fail closed: an unknown rate (the ``0`` sentinel, None or a
non-finite value) or a non-positive amount yields ``None`` instead of
``inf``/``nan``. Callers render ``None`` as the locale's zero string and treat
it as "conversion pending".
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional

from pos_pricing.models.constants import Direction
from pos_pricing.services.money import round2


def _usable_rate(rate: Optional[float]) -> bool:
    return rate is not None and math.isfinite(rate) and rate > 0


def _usable_amount(amount: Optional[float]) -> bool:
    return amount is not None and math.isfinite(amount) and amount > 0


def to_local(amount_foreign: Optional[float], rate: Optional[float]) -> Optional[float]:
    if not (_usable_rate(rate) and _usable_amount(amount_foreign)):
        return None
    return amount_foreign * rate  # type: ignore[operator]


def to_foreign(amount_local: Optional[float], rate: Optional[float]) -> Optional[float]:
    if not (_usable_rate(rate) and _usable_amount(amount_local)):
        return None
    return amount_local / rate  # type: ignore[operator]


def convert(
    amount: Optional[float], rate: Optional[float], direction: Direction
) -> Optional[float]:
    if direction is Direction.FOREIGN_TO_LOCAL:
        return to_local(amount, rate)
    return to_foreign(amount, rate)


@dataclass(frozen=True)
class ConverterState:
    """Snapshot of the calculator widget: input, direction and last result."""

    amount: float
    rate: Optional[float]
    direction: Direction = Direction.FOREIGN_TO_LOCAL
    result: Optional[float] = None

    @classmethod
    def start(
        cls,
        amount: float,
        rate: Optional[float],
        direction: Direction = Direction.FOREIGN_TO_LOCAL,
    ) -> "ConverterState":
        return cls(amount, rate, direction, convert(amount, rate, direction))

    def formatted_result(self) -> str:
        if self.direction is Direction.FOREIGN_TO_LOCAL:
            return format_local(self.result)
        return format_foreign(self.result)


def toggle_direction(state: ConverterState) -> ConverterState:
    # A valid prior result becomes the next input; otherwise the input stays.
    seed = state.result if _usable_amount(state.result) else state.amount
    direction = state.direction.flipped()
    return replace(
        state,
        amount=seed,  # type: ignore[arg-type]
        direction=direction,
        result=convert(seed, state.rate, direction),
    )


# Formatting ---------------------------------------------------------


def _group(amount: float, thousands: str, decimal: str) -> str:
    # Same half-up rounding as the numeric fields.
    text = f"{round2(amount):,.2f}"
    return text.replace(",", "\x00").replace(".", decimal).replace("\x00", thousands)


def format_local(amount: Optional[float]) -> str:
    """es-VE rendering: ``1234.5 -> '1.234,50'``."""
    if amount is None or not math.isfinite(amount):
        return "0,00"
    return _group(amount, ".", ",")


def format_foreign(amount: Optional[float]) -> str:
    """en-US rendering: ``1234.5 -> '1,234.50'``."""
    if amount is None or not math.isfinite(amount):
        return "0.00"
    return _group(amount, ",", ".")
