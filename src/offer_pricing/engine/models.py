"""
Data models for the offer pricing engine.

Uses dataclasses for structured, type-safe data representation.
Inputs (Product, SpecialOffer, CartEntry) hold raw values exactly as supplied;
results are frozen and built fresh for every call.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from .errors import InvalidOfferType


class OfferType(str, Enum):
    """Pricing mode requested for a line."""
    REGULAR = "regular"
    BULK = "bulk"

    @classmethod
    def parse(cls, value) -> 'OfferType':
        """Accept an OfferType, its string value, or None (regular)."""
        if value is None:
            return cls.REGULAR
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidOfferType(value)


def _pick(data: Mapping, *keys, default=None):
    """Return the first key present in data (camelCase or snake_case)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass
class SpecialOffer:
    """A buy-in-batches offer: every full batch is billed at offer_price_per_unit."""
    quantity: Any = None  # batch size
    offer_price_per_unit: Any = None

    @classmethod
    def from_dict(cls, data: Mapping) -> 'SpecialOffer':
        return cls(
            quantity=data.get('quantity'),
            offer_price_per_unit=_pick(data, 'offerPricePerUnit', 'offer_price_per_unit'),
        )

    def to_dict(self) -> dict:
        return {
            "quantity": self.quantity,
            "offerPricePerUnit": self.offer_price_per_unit,
        }


@dataclass
class Product:
    """A product as seen by the engine. Price fields are raw, coerced at pricing time."""
    price: Any = None
    special_offer: Optional[SpecialOffer] = None
    sku: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> 'Product':
        offer = _pick(data, 'specialOffer', 'special_offer')
        if isinstance(offer, Mapping):
            offer = SpecialOffer.from_dict(offer)
        elif not isinstance(offer, SpecialOffer):
            offer = None
        return cls(
            price=data.get('price'),
            special_offer=offer,
            sku=data.get('sku'),
            name=data.get('name'),
        )


_ENTRY_KEYS = {'product', 'quantity', 'offerType', 'offer_type'}
_PRODUCT_KEYS = {'price', 'specialOffer', 'special_offer', 'sku', 'name'}


@dataclass
class CartEntry:
    """One cart line: which product, how many units, and which pricing mode."""
    product: Product
    quantity: Any = 0
    offer_type: OfferType = OfferType.REGULAR
    extra: dict = field(default_factory=dict)  # caller keys passed through untouched

    @classmethod
    def from_dict(cls, data: Mapping) -> 'CartEntry':
        """
        Build an entry from either shape:
        - nested: {"product": {...}, "quantity": 2, "offerType": "bulk"}
        - flat: {"price": 100, "specialOffer": {...}, "quantity": 2, "offerType": "bulk"}

        Any other keys (ids, images, ...) are kept in `extra`.
        """
        product = data.get('product')
        known = _ENTRY_KEYS
        if isinstance(product, Mapping):
            product = Product.from_dict(product)
        elif not isinstance(product, Product):
            product = Product.from_dict(data)
            known = _ENTRY_KEYS | _PRODUCT_KEYS
        return cls(
            product=product,
            quantity=data.get('quantity', 0),
            offer_type=OfferType.parse(_pick(data, 'offerType', 'offer_type')),
            extra={k: v for k, v in data.items() if k not in known},
        )


@dataclass(frozen=True)
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass(frozen=True)
class BreakdownLine:
    """A priced segment of a line: the offer batches or the regular remainder."""
    type: str  # "offer" or "regular"
    quantity: int
    price_per_unit: Decimal
    total: Decimal

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "quantity": self.quantity,
            "pricePerUnit": float(self.price_per_unit),
            "total": float(self.total),
        }


@dataclass(frozen=True)
class PricingResult:
    """Priced breakdown for one product at one quantity."""
    subtotal: Decimal
    discount: Decimal
    total: Decimal
    items_at_offer_price: int
    items_at_regular_price: int
    effective_price_per_unit: Decimal
    breakdown: tuple[BreakdownLine, ...] = ()
    warnings: tuple[str, ...] = ()
    trace: tuple[TraceStep, ...] = ()

    @property
    def offer_applied(self) -> bool:
        return self.items_at_offer_price > 0

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """JSON-friendly dict using the original result keys."""
        return {
            "subtotal": float(self.subtotal),
            "discount": float(self.discount),
            "total": float(self.total),
            "itemsAtOfferPrice": self.items_at_offer_price,
            "itemsAtRegularPrice": self.items_at_regular_price,
            "effectivePricePerUnit": float(self.effective_price_per_unit),
            "breakdown": [line.to_dict() for line in self.breakdown],
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class CartItemResult:
    """A cart entry together with its computed pricing."""
    entry: CartEntry
    pricing: PricingResult

    def to_dict(self) -> dict:
        """The entry as supplied (extra keys included) plus its pricing."""
        product = self.entry.product
        offer = product.special_offer
        return {
            **self.entry.extra,
            "sku": product.sku,
            "name": product.name,
            "price": product.price,
            "specialOffer": offer.to_dict() if offer is not None else None,
            "quantity": int(self.entry.quantity),
            "offerType": OfferType.parse(self.entry.offer_type).value,
            "pricing": self.pricing.to_dict(),
        }


@dataclass(frozen=True)
class CartResult:
    """Cart-level totals plus per-item detail in input order."""
    subtotal: Decimal
    discount: Decimal
    total: Decimal
    items: tuple[CartItemResult, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "subtotal": float(self.subtotal),
            "discount": float(self.discount),
            "total": float(self.total),
            "items": [item.to_dict() for item in self.items],
        }
