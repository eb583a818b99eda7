"""Cart aggregation tests."""
import itertools
from decimal import Decimal

import pytest

from offer_pricing.engine import CartEntry, InvalidQuantity, OfferType, Product, SpecialOffer, price_cart, price_line


@pytest.fixture
def cart(plain_product, offer_product):
    cheap = Product(price="19.99", special_offer=SpecialOffer(quantity=2, offer_price_per_unit="14.99"), sku="CHEAP-2")
    return [
        CartEntry(product=offer_product, quantity=7, offer_type=OfferType.BULK),
        CartEntry(product=plain_product, quantity=2),
        CartEntry(product=cheap, quantity=5, offer_type=OfferType.BULK),
    ]


def test_empty_cart():
    result = price_cart([])

    assert result.subtotal == 0
    assert result.discount == 0
    assert result.total == 0
    assert result.items == ()
    assert result.to_dict() == {"subtotal": 0.0, "discount": 0.0, "total": 0.0, "items": []}


def test_cart_totals_are_sums_of_lines(cart):
    result = price_cart(cart)

    assert result.subtotal == sum(item.pricing.subtotal for item in result.items)
    assert result.discount == sum(item.pricing.discount for item in result.items)
    assert result.total == sum(item.pricing.total for item in result.items)
    # 580 + 200 + (4 × 14.99 + 19.99)
    assert result.total == Decimal("859.95")
    assert result.discount == result.subtotal - result.total


def test_cart_preserves_order_and_entries(cart):
    result = price_cart(cart)

    assert [item.entry for item in result.items] == cart
    assert result.items[0].pricing == price_line(cart[0].product, 7, "bulk")


def test_cart_totals_independent_of_order(cart):
    expected = price_cart(cart)
    for ordering in itertools.permutations(cart):
        result = price_cart(list(ordering))
        assert (result.subtotal, result.discount, result.total) == (expected.subtotal, expected.discount, expected.total)


def test_cart_accepts_mappings():
    result = price_cart([
        {"price": 100, "specialOffer": {"quantity": 3, "offerPricePerUnit": 80}, "quantity": 7, "offerType": "bulk"},
        {"product": {"price": "50"}, "quantity": 2},
    ])

    assert result.total == 580 + 100
    assert result.items[0].entry.offer_type is OfferType.BULK
    assert result.items[1].entry.offer_type is OfferType.REGULAR


def test_cart_does_not_mutate_entries(cart):
    snapshot = [(e.product, e.quantity, e.offer_type) for e in cart]
    price_cart(cart)
    assert [(e.product, e.quantity, e.offer_type) for e in cart] == snapshot


def test_cart_rejects_negative_quantity(plain_product):
    with pytest.raises(InvalidQuantity):
        price_cart([CartEntry(product=plain_product, quantity=-2)])


def test_cart_dict_output(cart):
    data = price_cart(cart).to_dict()

    assert data["items"][0]["sku"] == "OFFER-3"
    assert data["items"][0]["offerType"] == "bulk"
    assert data["items"][0]["pricing"]["itemsAtOfferPrice"] == 6
    assert data["total"] == pytest.approx(859.95)


def test_cart_items_echo_the_entry():
    result = price_cart([
        {"id": "x1", "image": "a.png", "price": 100, "specialOffer": {"quantity": 3, "offerPricePerUnit": 80}, "quantity": 4, "offerType": "bulk"},
        {"lineId": 7, "product": {"price": "50", "sku": "B"}, "quantity": 1},
    ])

    first, second = [item.to_dict() for item in result.items]
    assert first["id"] == "x1"
    assert first["image"] == "a.png"
    assert first["price"] == 100
    assert first["specialOffer"] == {"quantity": 3, "offerPricePerUnit": 80}
    assert first["pricing"]["total"] == 340.0

    assert second["lineId"] == 7
    assert second["price"] == "50"
    assert second["specialOffer"] is None
    assert second["sku"] == "B"
    assert "product" not in second


def test_extra_keys_do_not_override_computed_fields():
    result = price_cart([{"price": 10, "quantity": 2, "pricing": "stale"}])
    item = result.items[0].to_dict()

    assert result.items[0].entry.extra == {"pricing": "stale"}
    assert item["pricing"]["total"] == 20.0
