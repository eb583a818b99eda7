"""
Centralized settings for the offer pricing engine.

Values come from environment variables so the API, scripts and tests can
share one configuration without a settings file.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Mapping, Optional


_TRUE_VALUES = ('1', 'true', 'yes', 'on')


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Raise on unparsable price/offer fields instead of using 0
    strict_numeric_fields: bool = False

    # Discount label
    currency_symbol: str = "₹"
    discount_suffix: str = "सूट"

    # Product catalog (CSV or XLSX) used by the API and scripts
    catalog_path: Optional[Path] = None

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Load settings from the environment."""
        env = os.environ if environ is None else environ

        catalog = env.get('OFFER_PRICING_CATALOG', '').strip()

        return cls(
            strict_numeric_fields=env.get('OFFER_PRICING_STRICT', '').strip().lower() in _TRUE_VALUES,
            currency_symbol=env.get('OFFER_PRICING_CURRENCY_SYMBOL', cls.currency_symbol),
            discount_suffix=env.get('OFFER_PRICING_DISCOUNT_SUFFIX', cls.discount_suffix),
            catalog_path=Path(catalog) if catalog else None,
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
