"""
Exceptions raised by the pricing engine.

Business outcomes (no offer, ineligible offer, zero batch size) are never
errors; they show up in the result shape instead.
"""


class PricingError(ValueError):
    """Base class for all pricing input errors."""


class InvalidQuantity(PricingError):
    """Requested quantity is negative or not a whole number of units."""

    def __init__(self, quantity):
        self.quantity = quantity
        super().__init__(f"Quantity must be a non-negative integer, got {quantity!r}")


class InvalidOfferType(PricingError):
    """Offer type is not one of the known modes."""

    def __init__(self, offer_type):
        self.offer_type = offer_type
        super().__init__(f"Unknown offer type {offer_type!r} (expected 'regular' or 'bulk')")


class InvalidNumericField(PricingError):
    """A price or offer field could not be parsed (strict mode only)."""

    def __init__(self, field_name: str, value):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Field '{field_name}' is not a valid number: {value!r}")
