import math

import pytest

from pos_pricing.models.constants import Direction
from pos_pricing.services.converter import (
    ConverterState,
    convert,
    format_foreign,
    format_local,
    to_foreign,
    to_local,
    toggle_direction,
)
from pos_pricing.services.money import round2


@pytest.mark.parametrize("amount", [0.01, 1, 12.5, 999.99, 123456.78])
@pytest.mark.parametrize("rate", [0.5, 36.52, 216.37, 4000])
def test_round_trip(amount, rate):
    assert to_foreign(to_local(amount, rate), rate) == pytest.approx(amount)


@pytest.mark.parametrize("amount", [-5, 0, 1, 100])
def test_zero_rate_returns_none(amount):
    assert to_local(amount, 0) is None
    assert to_foreign(amount, 0) is None


@pytest.mark.parametrize("rate", [None, math.inf, math.nan, -3])
def test_unusable_rate_returns_none(rate):
    assert to_local(10, rate) is None
    assert to_foreign(10, rate) is None


def test_non_positive_amount_returns_none():
    assert to_local(0, 36.5) is None
    assert to_foreign(-1, 36.5) is None


def test_convert_selects_formula():
    assert convert(2, 40, Direction.FOREIGN_TO_LOCAL) == 80
    assert convert(80, 40, Direction.LOCAL_TO_FOREIGN) == 2


def test_toggle_seeds_input_with_result():
    state = ConverterState.start(10, 40.0)
    assert state.result == 400

    flipped = toggle_direction(state)
    assert flipped.direction is Direction.LOCAL_TO_FOREIGN
    assert flipped.amount == 400
    assert flipped.result == pytest.approx(10)


def test_toggle_keeps_input_without_valid_result():
    state = ConverterState.start(10, 0.0)
    assert state.result is None

    flipped = toggle_direction(state)
    assert flipped.amount == 10
    assert flipped.direction is Direction.LOCAL_TO_FOREIGN
    assert flipped.result is None


def test_format_local_uses_comma_decimal():
    assert format_local(1234.5) == "1.234,50"
    assert format_local(0.456) == "0,46"
    assert format_local(1234567.891) == "1.234.567,89"


def test_format_foreign_uses_period_decimal():
    assert format_foreign(1234.5) == "1,234.50"
    assert format_foreign(3) == "3.00"


@pytest.mark.parametrize(
    "amount, local, foreign",
    [(0.125, "0,13", "0.13"), (2.675, "2,68", "2.68"), (1.005, "1,01", "1.01")],
)
def test_format_rounds_half_up_like_totals(amount, local, foreign):
    assert format_local(amount) == local
    assert format_foreign(amount) == foreign
    assert format_foreign(round2(amount)) == foreign


def test_format_unavailable_amounts():
    assert format_local(None) == "0,00"
    assert format_local(math.nan) == "0,00"
    assert format_foreign(None) == "0.00"
    assert format_foreign(math.inf) == "0.00"


def test_state_formats_by_direction():
    assert ConverterState.start(2, 1000.0).formatted_result() == "2.000,00"
    state = ConverterState.start(2000, 1000.0, Direction.LOCAL_TO_FOREIGN)
    assert state.formatted_result() == "2.00"
