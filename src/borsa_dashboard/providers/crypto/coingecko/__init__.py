"""CoinGecko provider package."""
from borsa_dashboard.providers.crypto.coingecko.coin_gecko_provider import \
    CoinGeckoProvider

__all__ = ["CoinGeckoProvider"]
