"""
Catalog Service - loads products and their special offers from a spreadsheet.

Expected columns: SKU, Name, Price, Offer Quantity, Offer Price Per Unit.
Rows with both offer cells empty have no special offer. Cell values are
handed to the engine raw; coercion happens at pricing time.
"""
import logging
from pathlib import Path
from typing import Mapping, Optional

import pandas as pd

from ..engine.line_calculator import validate_quantity
from ..engine.models import CartEntry, OfferType, Product, SpecialOffer

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('SKU', 'Price')
OFFER_COLUMNS = ('Offer Quantity', 'Offer Price Per Unit')


class CatalogError(Exception):
    """Catalog file is missing or malformed."""


class UnknownSku(KeyError):
    """Requested SKU is not in the catalog."""


def read_table(path: Path) -> pd.DataFrame:
    """Read a CSV or Excel sheet with SKUs kept as strings."""
    if path.suffix.lower() in ('.xlsx', '.xls'):
        df = pd.read_excel(path, dtype={'SKU': str})
    else:
        df = pd.read_csv(path, dtype={'SKU': str})
    df.columns = [str(c).strip() for c in df.columns]
    return df


class CatalogService:
    """Product lookup by SKU backed by a pandas DataFrame."""

    def __init__(self, catalog_path: Path):
        self.catalog_path = Path(catalog_path)

        if not self.catalog_path.exists():
            raise CatalogError(f"Catalog not found at {self.catalog_path}")

        df = read_table(self.catalog_path)
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise CatalogError(f"Catalog {self.catalog_path.name} is missing columns: {', '.join(missing)}")

        for col in OFFER_COLUMNS + ('Name',):
            if col not in df.columns:
                df[col] = None

        df['SKU'] = df['SKU'].astype(str).str.strip()
        duplicates = df['SKU'][df['SKU'].duplicated()].unique()
        if len(duplicates) > 0:
            logger.warning("Duplicate SKUs in catalog, keeping first entry: %s", ", ".join(duplicates))
        self.catalog = df.drop_duplicates(subset='SKU', keep='first').set_index('SKU')

        logger.info("Loaded %d products from %s", len(self.catalog), self.catalog_path)

    def __len__(self) -> int:
        return len(self.catalog)

    def __contains__(self, sku) -> bool:
        return str(sku).strip() in self.catalog.index

    def reload_data(self):
        """Reload the catalog from disk."""
        self.__init__(self.catalog_path)

    def get_product(self, sku: str) -> Optional[Product]:
        """Build a Product for a SKU, or None when unknown."""
        sku = str(sku).strip()
        if sku not in self.catalog.index:
            return None
        return self._row_to_product(sku, self.catalog.loc[sku])

    def list_products(self) -> list[Product]:
        """All products in catalog order."""
        return [self._row_to_product(sku, row) for sku, row in self.catalog.iterrows()]

    def build_cart(self, items: Mapping[str, tuple]) -> list[CartEntry]:
        """
        Turn {SKU: (quantity, offer_type)} into cart entries.

        Raises:
            UnknownSku: a SKU is not in the catalog
        """
        entries = []
        for sku, (quantity, offer_type) in items.items():
            product = self.get_product(sku)
            if product is None:
                raise UnknownSku(sku)
            entries.append(CartEntry(product=product, quantity=quantity, offer_type=OfferType.parse(offer_type)))
        return entries

    @staticmethod
    def _row_to_product(sku: str, row: pd.Series) -> Product:
        offer_qty = _cell(row.get('Offer Quantity'))
        offer_price = _cell(row.get('Offer Price Per Unit'))

        offer = None
        if offer_qty is not None or offer_price is not None:
            offer = SpecialOffer(quantity=offer_qty, offer_price_per_unit=offer_price)

        name = _cell(row.get('Name'))
        return Product(
            price=_cell(row.get('Price')),
            special_offer=offer,
            sku=sku,
            name=str(name) if name is not None else None,
        )


def _cell(value):
    """Empty cells become None, numpy scalars become plain Python values."""
    if value is None or pd.isna(value):
        return None
    if hasattr(value, 'item'):
        return value.item()
    return value


def read_cart_items(path: Path) -> dict:
    """
    Read {SKU: (quantity, offer_type)} from a cart sheet with SKU, Quantity
    and optional Offer Type columns. Repeated SKUs are summed.

    Raises:
        CatalogError: columns missing, or one SKU listed with two offer types
        InvalidQuantity: a Quantity cell is empty, negative or fractional
        InvalidOfferType: an Offer Type cell is not regular/bulk
    """
    path = Path(path)
    df = read_table(path)
    if 'SKU' not in df.columns or 'Quantity' not in df.columns:
        raise CatalogError(f"Cart {path.name} needs SKU and Quantity columns")
    if 'Offer Type' not in df.columns:
        df['Offer Type'] = None

    items = {}
    for _, row in df.iterrows():
        sku = str(row['SKU']).strip()
        qty = validate_quantity(_cell(row['Quantity']))
        offer_type = OfferType.parse(_cell(row['Offer Type']))
        if sku in items:
            prev_qty, prev_type = items[sku]
            if prev_type is not offer_type:
                raise CatalogError(
                    f"SKU {sku} is listed as both {prev_type.value} and {offer_type.value} in {path.name}"
                )
            items[sku] = (prev_qty + qty, offer_type)
        else:
            items[sku] = (qty, offer_type)
    return items
