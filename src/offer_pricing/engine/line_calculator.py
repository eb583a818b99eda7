"""
Line Pricing Calculator - prices one product at one requested quantity.

Two modes:
1. Flat: every unit at the regular price (no offer, offer not eligible,
   or the caller asked for regular pricing)
2. Batch offer: full batches at the offer price per unit, the remainder
   at the regular price
"""
import logging
import math
import numbers
from decimal import Decimal

from .coercion import ZERO, to_batch_size, to_decimal
from .errors import InvalidQuantity
from .models import BreakdownLine, OfferType, PricingResult, Product, TraceStep

logger = logging.getLogger(__name__)


def validate_quantity(quantity) -> int:
    """Return quantity as an int, or raise InvalidQuantity."""
    if isinstance(quantity, bool):
        raise InvalidQuantity(quantity)
    if isinstance(quantity, numbers.Integral):
        value = int(quantity)
    elif isinstance(quantity, float) and math.isfinite(quantity) and quantity.is_integer():
        value = int(quantity)
    elif isinstance(quantity, Decimal) and quantity.is_finite() and quantity == quantity.to_integral_value():
        value = int(quantity)
    else:
        raise InvalidQuantity(quantity)
    if value < 0:
        raise InvalidQuantity(quantity)
    return value


def price_line(product: Product, quantity: int, offer_type=OfferType.REGULAR, *, strict: bool = False) -> PricingResult:
    """
    Price a single line.

    Args:
        product: Product with raw price and optional special offer
        quantity: Units requested (non-negative integer)
        offer_type: "regular" or "bulk"; only bulk can activate the offer
        strict: Raise InvalidNumericField instead of treating bad fields as 0

    Returns:
        PricingResult with totals, unit split and breakdown

    Raises:
        InvalidQuantity: quantity is negative or not a whole number
        InvalidOfferType: offer_type is not regular/bulk
    """
    qty = validate_quantity(quantity)
    mode = OfferType.parse(offer_type)

    warnings: list[str] = []
    trace: list[TraceStep] = []

    regular_price = to_decimal(product.price, "price", warnings, strict)
    offer = product.special_offer
    batch_size = 0
    offer_price = ZERO
    if offer is not None:
        batch_size = to_batch_size(offer.quantity, "specialOffer.quantity", warnings, strict)
        offer_price = to_decimal(offer.offer_price_per_unit, "specialOffer.offerPricePerUnit", warnings, strict)

    trace.append(TraceStep("Regular Price", "Unit price", f"{regular_price}"))
    subtotal = regular_price * qty

    reason = _ineligibility_reason(offer is not None, batch_size, offer_price, mode)
    if reason:
        trace.append(TraceStep("Eligibility", reason))
        trace.append(TraceStep("Extension", f"Quantity {qty} × {regular_price}", f"{subtotal}"))
        return PricingResult(
            subtotal=subtotal,
            discount=ZERO,
            total=subtotal,
            items_at_offer_price=0,
            items_at_regular_price=qty,
            effective_price_per_unit=regular_price,
            breakdown=(),
            warnings=tuple(warnings),
            trace=tuple(trace),
        )

    trace.append(TraceStep("Eligibility", f"Batch offer active: {batch_size} units at {offer_price} each"))

    full_batches, remainder = divmod(qty, batch_size)
    items_at_offer_price = full_batches * batch_size
    items_at_regular_price = remainder

    offer_total = items_at_offer_price * offer_price
    regular_total = items_at_regular_price * regular_price
    total = offer_total + regular_total
    discount = subtotal - total

    trace.append(TraceStep("Batch Split", f"{full_batches} full batch(es), {remainder} remaining", f"{items_at_offer_price}+{remainder}"))

    breakdown = []
    if items_at_offer_price > 0:
        breakdown.append(BreakdownLine("offer", items_at_offer_price, offer_price, offer_total))
        trace.append(TraceStep("Offer Segment", f"{items_at_offer_price} × {offer_price}", f"{offer_total}"))
    if items_at_regular_price > 0:
        breakdown.append(BreakdownLine("regular", items_at_regular_price, regular_price, regular_total))
        trace.append(TraceStep("Regular Segment", f"{items_at_regular_price} × {regular_price}", f"{regular_total}"))

    # zero units requested: nothing to average over
    effective = total / qty if qty else ZERO
    trace.append(TraceStep("Total", f"Subtotal {subtotal} less discount {discount}", f"{total}"))

    if discount < 0:
        logger.debug("Offer price %s exceeds regular price %s for sku=%s", offer_price, regular_price, product.sku)

    return PricingResult(
        subtotal=subtotal,
        discount=discount,
        total=total,
        items_at_offer_price=items_at_offer_price,
        items_at_regular_price=items_at_regular_price,
        effective_price_per_unit=effective,
        breakdown=tuple(breakdown),
        warnings=tuple(warnings),
        trace=tuple(trace),
    )


def _ineligibility_reason(has_offer: bool, batch_size: int, offer_price: Decimal, mode: OfferType):
    """Return why batch pricing does not apply, or None when it does."""
    if not has_offer:
        return "No special offer, using regular price"
    if batch_size <= 0:
        return "Offer batch size is not positive, using regular price"
    if offer_price <= 0:
        return "Offer price is not positive, using regular price"
    if mode is not OfferType.BULK:
        return "Regular pricing requested"
    return None
