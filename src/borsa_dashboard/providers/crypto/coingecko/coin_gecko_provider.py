"""CoinGecko market data provider for cryptocurrencies."""
import logging

import httpx

from borsa_dashboard import config
from borsa_dashboard.db import Category
from borsa_dashboard.providers.core import (QuoteProviderABC,
                                            normalize_symbol, round2)
from borsa_dashboard.providers.crypto.coingecko.models import (
    SYMBOL_TO_COIN_ID, CoinGeckoPriceRow, CoinGeckoSimplePriceParams)
from borsa_dashboard.schemas import LiveQuote
from borsa_dashboard.utils import parse_timestamp

logger = logging.getLogger(__name__)


class CoinGeckoProvider(QuoteProviderABC):
    """Quote provider for cryptocurrencies via the CoinGecko REST API.

    Accepts catalog tickers ("BTC", "ETH") and translates them to CoinGecko
    ids; tickers without a known id are dropped before the request is made.
    """

    category = Category.CRYPTO
    api_name = "CoinGecko"

    BASE_URL = "https://api.coingecko.com/api/v3"
    PRO_BASE_URL = "https://pro-api.coingecko.com/api/v3"

    def __init__(
        self,
        api_key: str | None = None,
        use_pro_api: bool = False,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the CoinGecko provider.

        Args:
            api_key: CoinGecko API key. Defaults to COINGECKO_API_KEY env var.
            use_pro_api: Whether to use the Pro API endpoint.
            timeout: Request timeout in seconds. Defaults to BORSA_HTTP_TIMEOUT.
            client: Pre-built client (tests pass one with a mock transport).
        """
        self._api_key = api_key or config.COINGECKO_API_KEY
        self._use_pro_api = use_pro_api or bool(self._api_key)

        if client is not None:
            self._client = client
            return

        headers: dict[str, str] = {"Accept": "application/json"}
        if self._api_key:
            headers["x-cg-pro-api-key"] = self._api_key

        base = self.PRO_BASE_URL if self._use_pro_api else self.BASE_URL
        self._client = httpx.AsyncClient(
            base_url=base,
            headers=headers,
            timeout=timeout or config.HTTP_TIMEOUT_SECONDS,
        )

    async def fetch_quotes(self, symbols: list[str]) -> list[LiveQuote]:
        """Fetch quotes for catalog tickers in a single /simple/price call."""
        ids_by_symbol = {
            sym: SYMBOL_TO_COIN_ID[sym]
            for sym in (normalize_symbol(s) for s in symbols)
            if sym in SYMBOL_TO_COIN_ID
        }
        if not ids_by_symbol:
            return []

        params = CoinGeckoSimplePriceParams().model_dump() | {
            "ids": ",".join(ids_by_symbol.values()),
        }
        response = await self._client.get("/simple/price", params=params)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Unexpected /simple/price payload")

        quotes: list[LiveQuote] = []
        for sym, coin_id in ids_by_symbol.items():
            raw = data.get(coin_id)
            if not raw:
                continue
            row = CoinGeckoPriceRow.model_validate(raw)
            if row.usd is None:
                continue
            quotes.append(self._quote_from_row(sym, row))
        logger.debug(
            "CoinGecko returned %d of %d requested coins", len(quotes), len(ids_by_symbol)
        )
        return quotes

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    def _quote_from_row(self, symbol: str, row: CoinGeckoPriceRow) -> LiveQuote:
        """Build a LiveQuote from a /simple/price response row."""
        return LiveQuote(
            symbol=symbol,
            category=self.category,
            price=round2(row.usd),
            change_pct=round2(row.usd_24h_change or 0.0),
            volume=round2(row.usd_24h_vol),
            market_cap=round2(row.usd_market_cap),
            fetched_at=parse_timestamp(row.last_updated_at),
        )
