"""Models for YFinance provider."""
from pydantic import BaseModel

# Borsa Istanbul tickers are listed on Yahoo with this suffix.
BIST_SUFFIX = ".IS"


class YFinancePriceFields(BaseModel):
    """Price fields pulled from a ticker's fast_info (or full info as fallback)."""

    price: float
    previous_close: float | None = None
    volume: float | None = None
    market_cap: float | None = None
