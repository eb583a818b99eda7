"""Engine subpackage - line pricing, cart aggregation and discount labels."""
from .models import (
    OfferType,
    SpecialOffer,
    Product,
    CartEntry,
    BreakdownLine,
    PricingResult,
    CartItemResult,
    CartResult,
)
from .errors import PricingError, InvalidQuantity, InvalidOfferType, InvalidNumericField
from .line_calculator import price_line
from .cart import price_cart
from .formatting import format_discount
from .pricing_engine import PricingEngine

__all__ = [
    'OfferType', 'SpecialOffer', 'Product', 'CartEntry', 'BreakdownLine',
    'PricingResult', 'CartItemResult', 'CartResult',
    'PricingError', 'InvalidQuantity', 'InvalidOfferType', 'InvalidNumericField',
    'price_line', 'price_cart', 'format_discount', 'PricingEngine',
]
