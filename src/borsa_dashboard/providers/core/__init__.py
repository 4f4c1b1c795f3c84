"""Core provider abstractions."""
from borsa_dashboard.providers.core.error_mapper import ProviderErrorMapper
from borsa_dashboard.providers.core.market_provider_abc import QuoteProviderABC
from borsa_dashboard.providers.core.utils import (normalize_symbol, pct_change,
                                                  round2)

__all__ = [
    "ProviderErrorMapper",
    "QuoteProviderABC",
    "normalize_symbol",
    "pct_change",
    "round2",
]
