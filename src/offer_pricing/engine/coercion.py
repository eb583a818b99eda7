"""
Numeric coercion for product and offer fields.

Prices and offer fields arrive from forms, JSON bodies and spreadsheet cells,
so they may be strings, floats, NaN or missing. Parsing is best-effort:
a leading number is accepted (``"120 INR"`` -> 120), anything unparsable
becomes 0. Every fallback is reported as a warning so callers can surface it.

Strict mode turns each fallback into an ``InvalidNumericField`` error.
"""
import logging
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from .errors import InvalidNumericField

logger = logging.getLogger(__name__)

ZERO = Decimal('0')

# Amounts at or above 10**101 are rejected; arithmetic on them can overflow the decimal context
MAX_EXPONENT = 100

_LEADING_NUMBER = re.compile(r'^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)')


def _is_missing(value) -> bool:
    """None, blank strings and NaN cells all mean 'not provided'."""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _fallback(field_name: str, value, reason: str, warnings: Optional[list], strict: bool) -> Decimal:
    if strict:
        raise InvalidNumericField(field_name, value)
    message = f"{field_name}: {reason} {value!r}, using 0"
    logger.debug("Numeric fallback - %s", message)
    if warnings is not None:
        warnings.append(message)
    return ZERO


def to_decimal(value, field_name: str = "value", warnings: Optional[list] = None, strict: bool = False) -> Decimal:
    """
    Parse a raw amount into a finite Decimal.

    Args:
        value: Raw value (str, int, float, Decimal, None, ...)
        field_name: Name used in warnings and errors
        warnings: Optional list that receives a message for every fallback
        strict: Raise InvalidNumericField instead of falling back to 0

    Returns:
        The parsed amount, or Decimal 0 when missing, unparsable or
        at or above 10**(MAX_EXPONENT + 1)
    """
    parsed = _parse_decimal(value, field_name, warnings, strict)
    if parsed.adjusted() > MAX_EXPONENT:
        return _fallback(field_name, value, "amount out of range", warnings, strict)
    return parsed


def _parse_decimal(value, field_name: str, warnings: Optional[list], strict: bool) -> Decimal:
    if _is_missing(value):
        return ZERO

    if isinstance(value, bool):
        return _fallback(field_name, value, "boolean is not a number", warnings, strict)

    if isinstance(value, Decimal):
        if value.is_finite():
            return value
        return _fallback(field_name, value, "non-finite amount", warnings, strict)

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        if math.isinf(value):
            return _fallback(field_name, value, "non-finite amount", warnings, strict)
        # str() keeps the short repr, so 0.1 stays 0.1 instead of its binary expansion
        return Decimal(str(value))

    if isinstance(value, str):
        text = value.strip()
        try:
            parsed = Decimal(text)
            if parsed.is_finite():
                return parsed
        except InvalidOperation:
            pass

        match = _LEADING_NUMBER.match(text)
        if match and not strict:
            parsed = Decimal(match.group(1))
            message = f"{field_name}: parsed leading number {parsed} from {value!r}"
            logger.debug("Numeric fallback - %s", message)
            if warnings is not None:
                warnings.append(message)
            return parsed
        return _fallback(field_name, value, "unparsable amount", warnings, strict)

    # numpy scalars and other numeric types coming out of pandas
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return _fallback(field_name, value, "unsupported type for amount", warnings, strict)
    if parsed.is_nan():
        return ZERO
    if not parsed.is_finite():
        return _fallback(field_name, value, "non-finite amount", warnings, strict)
    return parsed


def to_batch_size(value, field_name: str = "specialOffer.quantity", warnings: Optional[list] = None, strict: bool = False) -> int:
    """Parse a raw batch size into a whole number of units (0 when invalid)."""
    amount = to_decimal(value, field_name, warnings, strict)
    if amount != amount.to_integral_value():
        _fallback(field_name, value, "batch size is not a whole number", warnings, strict)
        return 0
    return int(amount)
