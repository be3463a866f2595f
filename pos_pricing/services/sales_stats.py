from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, Optional

from pos_pricing.models.sales import SaleRecord
from pos_pricing.services.money import round2, safe_float

"""Sales statistics helpers.

Aggregations behind the statistics and reports screens. Stored totals are
read as-is (each sale keeps the rate it was made at); malformed or missing
numbers count as zero so a single bad record cannot poison a summary.
"""


@dataclass
class DailyTotal:
    day: date
    total_local: float = 0.0
    count: int = 0


@dataclass
class SalesSummary:
    count: int = 0
    revenue_foreign: float = 0.0
    revenue_local: float = 0.0
    average_local: float = 0.0
    by_payment_method: Dict[str, float] = field(default_factory=dict)
    daily: Dict[date, DailyTotal] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, object]:
        return {
            "count": self.count,
            "revenue_foreign": round2(self.revenue_foreign),
            "revenue_local": round2(self.revenue_local),
            "average_local": round2(self.average_local),
            "by_payment_method": {
                k: round2(v) for k, v in sorted(self.by_payment_method.items())
            },
            "daily": [
                {
                    "date": d.day.isoformat(),
                    "total_local": round2(d.total_local),
                    "count": d.count,
                }
                for d in sorted(self.daily.values(), key=lambda d: d.day)
            ],
        }


def summarize_sales(
    sales: Iterable[SaleRecord],
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> SalesSummary:
    summary = SalesSummary()
    for sale in sales:
        day = sale.created_at.date()
        if date_from is not None and day < date_from:
            continue
        if date_to is not None and day > date_to:
            continue
        total_local = safe_float(sale.total_local)
        summary.count += 1
        summary.revenue_foreign += safe_float(sale.total_foreign)
        summary.revenue_local += total_local
        summary.by_payment_method[sale.payment_method] = (
            summary.by_payment_method.get(sale.payment_method, 0.0) + total_local
        )
        bucket = summary.daily.setdefault(day, DailyTotal(day=day))
        bucket.total_local += total_local
        bucket.count += 1
    if summary.count:
        summary.average_local = summary.revenue_local / summary.count
    return summary
