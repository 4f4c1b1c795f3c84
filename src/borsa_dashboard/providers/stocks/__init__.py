"""Equity quote providers."""
from borsa_dashboard.providers.stocks.yfinance import (SymbolNotFound,
                                                       YFinanceProvider)

__all__ = ["SymbolNotFound", "YFinanceProvider"]
