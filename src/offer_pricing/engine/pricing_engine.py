"""
Pricing Engine - settings-bound entry point for line, cart and label operations.

The calculation functions are pure; this class only carries the configured
strictness and label format so callers don't thread them through every call.
"""
from typing import Iterable, Optional

from ..config.settings import get_settings, Settings
from .cart import price_cart
from .formatting import format_discount
from .line_calculator import price_line
from .models import CartResult, OfferType, PricingResult, Product


class PricingEngine:
    """
    Batch-offer pricing engine.

    Resolution per line:
    1. Coerce price and offer fields (0 on bad input, or raise in strict mode)
    2. Check offer eligibility (offer present, batch size > 0, offer price > 0, bulk mode)
    3. Split quantity into full batches and remainder
    4. Price each segment and derive subtotal, discount and total
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    def strict(self) -> bool:
        return self.settings.strict_numeric_fields

    def price_line(self, product: Product, quantity: int, offer_type=OfferType.REGULAR) -> PricingResult:
        """Price a single product at the requested quantity."""
        return price_line(product, quantity, offer_type, strict=self.strict)

    def price_cart(self, items: Iterable) -> CartResult:
        """Price every entry of a cart and sum the totals."""
        return price_cart(items, strict=self.strict)

    def format_discount(self, discount) -> str:
        """Render a discount label using the configured currency symbol and suffix."""
        return format_discount(
            discount,
            currency_symbol=self.settings.currency_symbol,
            suffix=self.settings.discount_suffix,
        )
