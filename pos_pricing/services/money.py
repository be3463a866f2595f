"""Money / rounding helpers.

Centralized so pricing, checkout and statistics use identical rounding
semantics.
"""

from __future__ import annotations
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any


def round2(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def safe_float(value: Any) -> float:
    """Coerce stored numbers (possibly strings or None) to a finite float, else 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        f = float(value)
    except (TypeError, ValueError):
        return 0.0
    return f if math.isfinite(f) else 0.0
