"""Numeric coercion tests."""
from decimal import Decimal

import pytest

from offer_pricing.engine import InvalidNumericField
from offer_pricing.engine.coercion import to_batch_size, to_decimal


@pytest.mark.parametrize("raw, expected", [
    (100, Decimal("100")),
    ("100", Decimal("100")),
    (" 12.50 ", Decimal("12.50")),
    (0.1, Decimal("0.1")),
    (Decimal("3.3"), Decimal("3.3")),
    ("1e2", Decimal("100")),
])
def test_parses_valid_amounts(raw, expected):
    warnings = []
    assert to_decimal(raw, "price", warnings) == expected
    assert warnings == []


@pytest.mark.parametrize("raw", [None, "", "   ", float("nan")])
def test_missing_values_are_zero_without_warning(raw):
    warnings = []
    assert to_decimal(raw, "price", warnings) == 0
    assert warnings == []


@pytest.mark.parametrize("raw", ["abc", True, [1], float("inf"), {"a": 1}, "Infinity"])
def test_unparsable_values_are_zero_with_warning(raw):
    warnings = []
    assert to_decimal(raw, "price", warnings) == 0
    assert len(warnings) == 1
    assert warnings[0].startswith("price:")


def test_leading_number_is_kept():
    warnings = []
    assert to_decimal("120 INR", "price", warnings) == Decimal("120")
    assert len(warnings) == 1


@pytest.mark.parametrize("raw", ["abc", "120 INR", True, float("inf")])
def test_strict_mode_raises(raw):
    with pytest.raises(InvalidNumericField):
        to_decimal(raw, "price", strict=True)


def test_strict_mode_still_treats_missing_as_zero():
    assert to_decimal(None, "price", strict=True) == 0


@pytest.mark.parametrize("raw, expected", [(3, 3), ("4", 4), (5.0, 5), (None, 0), ("x", 0)])
def test_batch_size(raw, expected):
    assert to_batch_size(raw) == expected


def test_fractional_batch_size_is_invalid():
    warnings = []
    assert to_batch_size(2.5, warnings=warnings) == 0
    assert warnings
    with pytest.raises(InvalidNumericField):
        to_batch_size(2.5, strict=True)


@pytest.mark.parametrize("raw", ["9e999999", "1e1000000", Decimal("1E+500"), 10 ** 200])
def test_out_of_range_amounts_are_zero_with_warning(raw):
    warnings = []
    assert to_decimal(raw, "price", warnings) == 0
    assert len(warnings) == 1
    assert "out of range" in warnings[0]


def test_out_of_range_amount_strict():
    with pytest.raises(InvalidNumericField):
        to_decimal("9e999999", "price", strict=True)


def test_large_but_sane_amount_is_kept():
    assert to_decimal("1e30") == Decimal("1e30")


def test_out_of_range_batch_size():
    warnings = []
    assert to_batch_size("1e1000000", warnings=warnings) == 0
    assert warnings
    with pytest.raises(InvalidNumericField):
        to_batch_size("1e1000000", strict=True)
