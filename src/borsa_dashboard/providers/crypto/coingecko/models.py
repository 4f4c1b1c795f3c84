"""Models for CoinGecko provider (API params and response rows)."""
from pydantic import BaseModel

# Catalog ticker -> CoinGecko coin id.
SYMBOL_TO_COIN_ID: dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "BNB": "binancecoin",
    "SOL": "solana",
    "XRP": "ripple",
    "ADA": "cardano",
    "DOGE": "dogecoin",
    "DOT": "polkadot",
    "AVAX": "avalanche-2",
    "MATIC": "matic-network",
    "LINK": "chainlink",
    "UNI": "uniswap",
    "ATOM": "cosmos",
    "LTC": "litecoin",
    "NEAR": "near",
}


class CoinGeckoSimplePriceParams(BaseModel):
    """Params for /simple/price. Merge with 'ids' at call site."""

    vs_currencies: str = "usd"
    include_market_cap: str = "true"
    include_24hr_vol: str = "true"
    include_24hr_change: str = "true"
    include_last_updated_at: str = "true"


class CoinGeckoPriceRow(BaseModel):
    """One coin entry of a /simple/price response."""

    usd: float | None = None
    usd_market_cap: float | None = None
    usd_24h_vol: float | None = None
    usd_24h_change: float | None = None
    last_updated_at: float | None = None
