"""Cryptocurrency quote providers."""
from borsa_dashboard.providers.crypto.coingecko import CoinGeckoProvider

__all__ = ["CoinGeckoProvider"]
