#!/usr/bin/env python
"""
Price a cart file against a product catalog.

Usage:
    python scripts/price_cart.py --catalog catalog.csv --cart cart.csv [--strict] [--trace]

The cart file needs SKU and Quantity columns; Offer Type is optional
(regular or bulk, default regular).
"""
import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from offer_pricing.config.settings import Settings
from offer_pricing.engine import PricingEngine, PricingError
from offer_pricing.services.catalog_service import CatalogError, CatalogService, UnknownSku, read_cart_items

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("price_cart")


def main():
    parser = argparse.ArgumentParser(description="Price a cart with batch offers")
    parser.add_argument("--catalog", type=Path, required=True, help="Product catalog (CSV or XLSX)")
    parser.add_argument("--cart", type=Path, required=True, help="Cart sheet (CSV or XLSX)")
    parser.add_argument("--strict", action="store_true", help="Reject unparsable price fields")
    parser.add_argument("--trace", action="store_true", help="Print the pricing trace per line")
    args = parser.parse_args()

    settings = Settings.load()
    if args.strict:
        settings.strict_numeric_fields = True

    engine = PricingEngine(settings)
    try:
        catalog = CatalogService(args.catalog)
        entries = catalog.build_cart(read_cart_items(args.cart))
        result = engine.price_cart(entries)
    except (CatalogError, PricingError) as e:
        logger.error(str(e))
        sys.exit(1)
    except UnknownSku as e:
        logger.error(f"SKU {e.args[0]} not found in catalog")
        sys.exit(1)

    rows = []
    for item in result.items:
        pricing = item.pricing
        rows.append({
            "SKU": item.entry.product.sku,
            "Name": item.entry.product.name,
            "Qty": item.entry.quantity,
            "Mode": item.entry.offer_type.value,
            "At Offer": pricing.items_at_offer_price,
            "At Regular": pricing.items_at_regular_price,
            "Subtotal": float(pricing.subtotal),
            "Discount": float(pricing.discount),
            "Total": float(pricing.total),
        })
    print(pd.DataFrame(rows).to_string(index=False))
    print()
    print(f"Subtotal: {result.subtotal:.2f}")
    print(f"Discount: {result.discount:.2f}  {engine.format_discount(result.discount)}")
    print(f"Total:    {result.total:.2f}")

    for item in result.items:
        for warning in item.pricing.warnings:
            logger.warning(f"{item.entry.product.sku}: {warning}")
        if args.trace:
            print(f"\n[{item.entry.product.sku}]")
            print(item.pricing.get_trace_text())


if __name__ == "__main__":
    main()
