"""Yahoo Finance quote provider for Borsa Istanbul equities."""
import asyncio
import logging

import yfinance as yf

from borsa_dashboard import config
from borsa_dashboard.db import Category
from borsa_dashboard.providers.core import (QuoteProviderABC,
                                            normalize_symbol, pct_change,
                                            round2)
from borsa_dashboard.providers.stocks.yfinance.models import (
    BIST_SUFFIX, YFinancePriceFields)
from borsa_dashboard.schemas import LiveQuote
from borsa_dashboard.utils import utcnow

logger = logging.getLogger(__name__)


class SymbolNotFound(ValueError):
    """Yahoo has no price data for the ticker."""


class YFinanceProvider(QuoteProviderABC):
    """Quote provider for BIST stocks via Yahoo Finance.

    Uses the yfinance library, one ticker per symbol with the ".IS" suffix.
    No API key required. The 24h change is computed against the previous
    close since Yahoo does not report it directly for BIST listings.
    """

    category = Category.EQUITY
    api_name = "Yahoo Finance"

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize the YFinance provider.

        Args:
            timeout: Seconds to wait for a whole batch before giving up.
        """
        self._timeout = timeout or config.HTTP_TIMEOUT_SECONDS

    def _extract_fields(self, ticker: yf.Ticker, symbol: str) -> YFinancePriceFields:
        """Extract price fields from ticker; raises SymbolNotFound if price unavailable."""
        info = getattr(ticker, "fast_info", None)
        if info and (price := info.get("lastPrice") or info.get("regularMarketPrice")):
            return YFinancePriceFields(
                price=float(price),
                previous_close=info.get("previousClose"),
                volume=info.get("lastVolume"),
                market_cap=info.get("marketCap"),
            )
        full = ticker.info or {}
        price = full.get("currentPrice") or full.get("regularMarketPrice")
        if price is None:
            raise SymbolNotFound(f"Stock '{symbol}' not found or has no price data")
        return YFinancePriceFields(
            price=float(price),
            previous_close=full.get("previousClose") or full.get("regularMarketPreviousClose"),
            volume=full.get("volume"),
            market_cap=full.get("marketCap"),
        )

    def _fetch_quote_sync(self, symbol: str) -> LiveQuote:
        """Fetch a single quote synchronously (run in thread).

        yfinance raises its own exception types (e.g. YFRateLimitError); they
        are re-raised as ValueError so callers see one failure family.
        """
        try:
            ticker = yf.Ticker(f"{symbol}{BIST_SUFFIX}")
            fields = self._extract_fields(ticker, symbol)
        except ValueError:
            raise
        except Exception as e:
            raise ValueError(f"Failed to fetch quote for '{symbol}': {e}") from e
        return LiveQuote(
            symbol=symbol,
            category=self.category,
            price=round2(fields.price),
            change_pct=round2(pct_change(fields.price, fields.previous_close)),
            volume=round2(fields.volume),
            market_cap=round2(fields.market_cap),
            fetched_at=utcnow(),
        )

    async def fetch_quotes(self, symbols: list[str]) -> list[LiveQuote]:
        """Fetch quotes for the given tickers in parallel threads.

        Unknown tickers are omitted. If nothing resolved and at least one
        ticker failed for another reason, the first such failure is raised so
        the caller can treat the whole cycle as failed.
        """
        normalized = list(dict.fromkeys(normalize_symbol(s) for s in symbols))
        results = await asyncio.wait_for(
            asyncio.gather(
                *[asyncio.to_thread(self._fetch_quote_sync, s) for s in normalized],
                return_exceptions=True,
            ),
            timeout=self._timeout,
        )
        quotes = [r for r in results if isinstance(r, LiveQuote)]
        failures = [
            (sym, r)
            for sym, r in zip(normalized, results)
            if isinstance(r, Exception) and not isinstance(r, SymbolNotFound)
        ]
        for sym, exc in failures:
            logger.warning("Yahoo Finance fetch failed for %s: %s", sym, exc)
        if not quotes and failures:
            raise failures[0][1]
        return quotes
