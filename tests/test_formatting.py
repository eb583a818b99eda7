"""Discount label tests."""
from decimal import Decimal

import pytest

from offer_pricing.config.settings import Settings
from offer_pricing.engine import PricingEngine, format_discount


@pytest.mark.parametrize("amount", [0, -5, Decimal("-0.4"), None, "abc"])
def test_no_label_without_positive_discount(amount):
    assert format_discount(amount) == ""


def test_rounds_to_nearest_integer():
    label = format_discount(99.6)
    assert "100" in label
    assert label == "₹100 सूट"


@pytest.mark.parametrize("amount, expected", [
    (Decimal("0.5"), "₹1 सूट"),
    (Decimal("2.5"), "₹3 सूट"),
    (Decimal("2.49"), "₹2 सूट"),
    (120, "₹120 सूट"),
])
def test_halves_round_away_from_zero(amount, expected):
    assert format_discount(amount) == expected


def test_custom_symbol_and_suffix():
    assert format_discount(10, currency_symbol="$", suffix="off") == "$10 off"
    assert format_discount(10, currency_symbol="$", suffix="") == "$10"


def test_engine_uses_configured_label():
    engine = PricingEngine(Settings(currency_symbol="€", discount_suffix="Rabatt"))
    assert engine.format_discount(Decimal("4.5")) == "€5 Rabatt"


def test_large_amount_keeps_every_digit():
    assert format_discount(1e30) == "₹1000000000000000000000000000000 सूट"
    assert format_discount(Decimal("1.2E+3")) == "₹1200 सूट"
