"""Shared engine and catalog instances for the API."""
import logging
from typing import Optional

from ..config.settings import get_settings
from ..engine import PricingEngine
from ..services.catalog_service import CatalogError, CatalogService

logger = logging.getLogger(__name__)

settings = get_settings()
engine = PricingEngine(settings)


def load_catalog() -> Optional[CatalogService]:
    """Load the configured catalog, or None when not configured or unreadable."""
    if settings.catalog_path is None:
        return None
    try:
        return CatalogService(settings.catalog_path)
    except CatalogError as e:
        logger.error("Catalog unavailable: %s", e)
        return None


catalog = load_catalog()
