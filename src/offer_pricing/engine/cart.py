"""
Cart Aggregator - prices every cart entry and folds the results into totals.
"""
import logging
from collections.abc import Iterable, Mapping

from .coercion import ZERO
from .line_calculator import price_line
from .models import CartEntry, CartItemResult, CartResult

logger = logging.getLogger(__name__)


def price_cart(items: Iterable, *, strict: bool = False) -> CartResult:
    """
    Price a cart.

    Args:
        items: CartEntry instances or mappings accepted by CartEntry.from_dict
        strict: Passed through to price_line

    Returns:
        CartResult with summed subtotal/discount/total and per-item pricing
        in input order. An empty cart prices to zero.
    """
    subtotal = ZERO
    discount = ZERO
    total = ZERO
    priced = []

    for item in items:
        entry = CartEntry.from_dict(item) if isinstance(item, Mapping) else item
        pricing = price_line(entry.product, entry.quantity, entry.offer_type, strict=strict)

        # Decimal sums are exact, so the order of accumulation does not matter
        subtotal += pricing.subtotal
        discount += pricing.discount
        total += pricing.total
        priced.append(CartItemResult(entry=entry, pricing=pricing))

    logger.debug("Priced cart: %d item(s), total=%s, discount=%s", len(priced), total, discount)

    return CartResult(
        subtotal=subtotal,
        discount=discount,
        total=total,
        items=tuple(priced),
    )
