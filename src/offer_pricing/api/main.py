import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict

from offer_pricing import __version__
from offer_pricing.engine import CartEntry, OfferType, PricingError, Product
from offer_pricing.engine.coercion import to_decimal
from offer_pricing.services.catalog_service import UnknownSku
from offer_pricing.api import state

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Offer Pricing API",
    description="Batch-offer pricing for product lines and carts",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SpecialOfferIn(BaseModel):
    quantity: Any = None
    offerPricePerUnit: Any = None


class ProductIn(BaseModel):
    price: Any = None
    specialOffer: Optional[SpecialOfferIn] = None
    sku: Optional[str] = None
    name: Optional[str] = None


class LineRequest(BaseModel):
    # unknown keys (ids, images, ...) are echoed back on cart items
    model_config = ConfigDict(extra="allow")

    product: ProductIn
    quantity: int
    offerType: str = "regular"


class CartRequest(BaseModel):
    items: List[LineRequest]


class QuoteItem(BaseModel):
    quantity: int
    offerType: str = "regular"


class QuoteRequest(BaseModel):
    items: Dict[str, QuoteItem]  # SKU → quantity/offer type


def _to_entry(line: LineRequest) -> CartEntry:
    return CartEntry(
        product=Product.from_dict(line.product.model_dump()),
        quantity=line.quantity,
        offer_type=OfferType.parse(line.offerType),
        extra=dict(line.model_extra or {}),
    )


@app.get("/")
async def root():
    return {
        "status": "online",
        "message": "Offer Pricing API Active",
        "strict": state.engine.strict,
        "catalog_loaded": state.catalog is not None,
    }


@app.post("/price/line")
async def price_line(req: LineRequest):
    try:
        entry = _to_entry(req)
        result = state.engine.price_line(entry.product, entry.quantity, entry.offer_type)
    except PricingError as e:
        logger.info("Rejected pricing request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    data = result.to_dict()
    data["label"] = state.engine.format_discount(result.discount)
    return data


@app.post("/price/cart")
async def price_cart(req: CartRequest):
    try:
        result = state.engine.price_cart([_to_entry(line) for line in req.items])
    except PricingError as e:
        logger.info("Rejected pricing request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    data = result.to_dict()
    data["label"] = state.engine.format_discount(result.discount)
    return data


@app.get("/format/discount")
async def format_discount(amount: float):
    return {"label": state.engine.format_discount(amount)}


@app.get("/catalog")
async def get_catalog(search: Optional[str] = None):
    if state.catalog is None:
        raise HTTPException(status_code=404, detail="No catalog configured")

    products = state.catalog.list_products()
    if search:
        needle = search.lower()
        products = [
            p for p in products
            if needle in p.sku.lower() or (p.name and needle in p.name.lower())
        ]

    return [
        {
            "sku": p.sku,
            "name": p.name,
            "price": float(to_decimal(p.price, "price")),
            "specialOffer": None if p.special_offer is None else p.special_offer.to_dict(),
        }
        for p in products
    ]


@app.post("/catalog/quote")
async def quote_from_catalog(req: QuoteRequest):
    if state.catalog is None:
        raise HTTPException(status_code=404, detail="No catalog configured")
    try:
        entries = state.catalog.build_cart(
            {sku: (item.quantity, item.offerType) for sku, item in req.items.items()}
        )
        result = state.engine.price_cart(entries)
    except UnknownSku as e:
        raise HTTPException(status_code=404, detail=f"SKU {e.args[0]} not found in catalog")
    except PricingError as e:
        logger.info("Rejected pricing request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    data = result.to_dict()
    data["label"] = state.engine.format_discount(result.discount)
    return data
