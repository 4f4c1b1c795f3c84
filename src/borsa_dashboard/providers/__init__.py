"""Quote and news providers for BIST equities and crypto.

- YFinanceProvider: Borsa Istanbul quotes via Yahoo Finance
- CoinGeckoProvider: cryptocurrency quotes via the CoinGecko API
- SimulatedProvider: catalog-based fallback when a live source fails
- NewsProvider: headline list per instrument

All quote providers implement QuoteProviderABC and return LiveQuote objects
keyed by catalog ticker.

Example:
    async with CoinGeckoProvider() as provider:
        for quote in await provider.fetch_quotes(["BTC", "ETH"]):
            print(f"{quote.symbol}: ${quote.price}")
"""
from borsa_dashboard.providers.core import (ProviderErrorMapper,
                                            QuoteProviderABC)
from borsa_dashboard.providers.crypto import CoinGeckoProvider
from borsa_dashboard.providers.news import NewsProvider
from borsa_dashboard.providers.simulated import SimulatedProvider
from borsa_dashboard.providers.stocks import YFinanceProvider

__all__ = [
    "CoinGeckoProvider",
    "NewsProvider",
    "ProviderErrorMapper",
    "QuoteProviderABC",
    "SimulatedProvider",
    "YFinanceProvider",
]
