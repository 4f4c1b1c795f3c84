"""Yahoo Finance provider package."""
from borsa_dashboard.providers.stocks.yfinance.y_finance_provider import (
    SymbolNotFound, YFinanceProvider)

__all__ = ["SymbolNotFound", "YFinanceProvider"]
