"""Static instrument catalog."""
from borsa_dashboard.catalog.catalog import ReferenceCatalog, default_catalog
from borsa_dashboard.catalog.instruments import CRYPTO_ASSETS, TURKISH_STOCKS

__all__ = ["CRYPTO_ASSETS", "ReferenceCatalog", "TURKISH_STOCKS", "default_catalog"]
