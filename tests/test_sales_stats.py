from datetime import date, datetime

from pos_pricing.models.sales import SaleRecord
from pos_pricing.services.sales_stats import summarize_sales


def _sale(day: int, local, foreign=10.0, method="cash") -> SaleRecord:
    return SaleRecord(
        total_foreign=foreign,
        total_local=local,
        rate=40.0,
        payment_method=method,
        created_at=datetime(2024, 5, day, 15, 30),
    )


def test_summary_totals_and_breakdowns():
    sales = [
        _sale(20, 400.0),
        _sale(20, 800.0, foreign=20.0, method="debit"),
        _sale(21, 300.0, foreign=7.5),
    ]
    summary = summarize_sales(sales)
    assert summary.count == 3
    assert summary.revenue_foreign == 37.5
    assert summary.revenue_local == 1500.0
    assert summary.average_local == 500.0
    assert summary.by_payment_method == {"cash": 700.0, "debit": 800.0}
    assert summary.daily[date(2024, 5, 20)].count == 2
    assert summary.daily[date(2024, 5, 20)].total_local == 1200.0


def test_missing_totals_count_as_zero():
    summary = summarize_sales([_sale(20, None, foreign=None), _sale(20, 100.0)])
    assert summary.count == 2
    assert summary.revenue_local == 100.0
    assert summary.revenue_foreign == 10.0


def test_date_range_filter_is_inclusive():
    sales = [_sale(19, 100.0), _sale(20, 200.0), _sale(21, 300.0), _sale(22, 400.0)]
    summary = summarize_sales(sales, date(2024, 5, 20), date(2024, 5, 21))
    assert summary.count == 2
    assert summary.revenue_local == 500.0


def test_empty_summary():
    data = summarize_sales([]).as_dict()
    assert data["count"] == 0
    assert data["average_local"] == 0.0
    assert data["daily"] == []


def test_as_dict_sorts_days():
    data = summarize_sales([_sale(21, 1.0), _sale(20, 2.0)]).as_dict()
    assert [d["date"] for d in data["daily"]] == ["2024-05-20", "2024-05-21"]
