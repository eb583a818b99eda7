"""Discount label formatting for display."""
from decimal import ROUND_HALF_UP

from .coercion import to_decimal

DEFAULT_CURRENCY_SYMBOL = "₹"
DEFAULT_DISCOUNT_SUFFIX = "सूट"


def format_discount(discount, *, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL, suffix: str = DEFAULT_DISCOUNT_SUFFIX) -> str:
    """
    Render a discount amount as e.g. "₹100 सूट".

    The amount is rounded to a whole number, halves away from zero.
    Zero, negative and unparsable amounts render as an empty string.
    """
    amount = to_decimal(discount, "discount")
    if amount <= 0:
        return ""
    rounded = amount.to_integral_value(rounding=ROUND_HALF_UP)
    label = f"{currency_symbol}{rounded:f}"
    return f"{label} {suffix}" if suffix else label
