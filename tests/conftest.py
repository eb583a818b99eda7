import os
import sys

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import pytest

from offer_pricing.engine import Product, SpecialOffer


@pytest.fixture
def plain_product():
    """Price 100, no special offer."""
    return Product(price=100, sku="PLAIN-1", name="Plain Widget")


@pytest.fixture
def offer_product():
    """Price 100, batches of 3 at 80 per unit."""
    return Product(
        price=100,
        special_offer=SpecialOffer(quantity=3, offer_price_per_unit=80),
        sku="OFFER-3",
        name="Batch Widget",
    )
