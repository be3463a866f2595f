import pytest

from pos_pricing.models.constants import SaleUnit
from pos_pricing.models.product import ProductPricing
from pos_pricing.models.sales import CartLine
from pos_pricing.services.checkout import (
    compute_cart_totals,
    mixed_payment_balances,
    remaining_foreign_after_local,
    remaining_local_after_foreign,
)


def _lines():
    return [
        CartLine(product=ProductPricing(cost_foreign=10, profit_setting=30), quantity=2),
        CartLine(
            product=ProductPricing(cost_foreign=4, profit_setting=0.5, sale_unit=SaleUnit.WEIGHT),
            quantity=1.5,
        ),
    ]


def test_card_payment_has_no_discount():
    totals = compute_cart_totals(_lines(), 40.0, "debit")
    assert totals.lines[0].total_foreign == pytest.approx(26)
    assert totals.lines[1].total_foreign == pytest.approx(9)
    assert totals.base_total_foreign == pytest.approx(35)
    assert totals.discount_fraction == 0
    assert totals.total_foreign == pytest.approx(35)
    assert totals.total_local == pytest.approx(1400)
    assert totals.ready


def test_cash_payment_gets_discount():
    totals = compute_cart_totals(_lines(), 40.0, "cash", cash_discount_fraction=0.3)
    assert totals.discount_foreign == pytest.approx(10.5)
    assert totals.total_foreign == pytest.approx(24.5)
    assert totals.total_local == pytest.approx(980)


def test_unknown_rate_keeps_foreign_totals_only():
    totals = compute_cart_totals(_lines(), 0.0, "transfer")
    assert totals.total_foreign == pytest.approx(35)
    assert totals.total_local is None
    assert all(lt.total_local is None for lt in totals.lines)
    assert not totals.ready


def test_remaining_local_after_foreign():
    assert remaining_local_after_foreign(1000, 10, 40) == pytest.approx(600)
    assert remaining_local_after_foreign(1000, 30, 40) == 0
    assert remaining_local_after_foreign(1000, 10, 0) is None


def test_remaining_foreign_after_local():
    assert remaining_foreign_after_local(1000, 600, 40) == pytest.approx(10)
    assert remaining_foreign_after_local(1000, 1200, 40) == 0
    assert remaining_foreign_after_local(1000, 600, 0) is None


def test_mixed_payment_balances_at_cent_precision():
    assert mixed_payment_balances(1000, 10, 600, 40)
    assert mixed_payment_balances(1000.004, 10, 600, 40)
    assert not mixed_payment_balances(1000, 10, 590, 40)
    assert not mixed_payment_balances(1000, 10, 600, 0)
