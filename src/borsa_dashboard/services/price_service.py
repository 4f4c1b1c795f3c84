"""Price proxy service: live quotes per category with cached/simulated fallback.

PriceService wraps one live provider per category with error mapping,
symbol normalization and a last-good-quote cache. fetch_live() propagates
upstream failures (pollers need the failure signal); fetch() never fails on
upstream errors and flags the snapshot as degraded instead.
"""
import asyncio
import logging
from collections.abc import Mapping

import httpx

from borsa_dashboard.db import Category
from borsa_dashboard.errors import ValidationFailed
from borsa_dashboard.providers.core import (ProviderErrorMapper,
                                            QuoteProviderABC,
                                            normalize_symbol)
from borsa_dashboard.schemas import LiveQuote, QuoteSnapshot
from borsa_dashboard.utils import utcnow

logger = logging.getLogger(__name__)

# Exceptions from providers we recover from; all others propagate (e.g. bugs, BaseException).
_PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    ValueError,
    KeyError,
    TypeError,
    TimeoutError,
    OSError,
    asyncio.TimeoutError,
    httpx.HTTPError,
)


class PriceService:
    """Fetches quotes for one category at a time from the matching provider."""

    def __init__(
        self,
        providers: Mapping[Category, QuoteProviderABC],
        fallbacks: Mapping[Category, QuoteProviderABC],
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize with live and fallback providers.

        Args:
            providers: Live provider per category (e.g. YFinanceProvider for equity).
            fallbacks: Provider used when the live one fails and nothing is cached.
            timeout_seconds: Upper bound for one live fetch; a timeout is a failure.
        """
        self._providers = dict(providers)
        self._fallbacks = dict(fallbacks)
        self._timeout = timeout_seconds
        self._mappers = {
            category: ProviderErrorMapper(resource_name="Quote", api_name=p.api_name)
            for category, p in self._providers.items()
        }
        self._last_good: dict[Category, dict[str, LiveQuote]] = {c: {} for c in self._providers}

    def error_mapper(self, category: Category) -> ProviderErrorMapper:
        return self._mappers[category]

    def _provider(self, category: Category) -> QuoteProviderABC:
        try:
            return self._providers[category]
        except KeyError:
            raise ValidationFailed(f"Unsupported category '{category}'") from None

    @staticmethod
    def _normalize(symbols: list[str]) -> list[str]:
        normalized = [normalize_symbol(s) for s in symbols if s and s.strip()]
        if not normalized:
            raise ValidationFailed("At least one symbol is required")
        return list(dict.fromkeys(normalized))

    async def fetch_live(self, category: Category, symbols: list[str]) -> QuoteSnapshot:
        """Fetch from the live provider only. Raises on upstream failure."""
        provider = self._provider(category)
        wanted = self._normalize(symbols)
        call = provider.fetch_quotes(wanted)
        if self._timeout is not None:
            quotes = await asyncio.wait_for(call, timeout=self._timeout)
        else:
            quotes = await call
        by_symbol = {q.symbol: q for q in quotes if q.symbol in wanted}
        self._last_good[category].update(by_symbol)
        return QuoteSnapshot(category=category, quotes=by_symbol, fetched_at=utcnow())

    async def fetch(self, category: Category, symbols: list[str]) -> QuoteSnapshot:
        """Best-effort fetch: live quotes, else last good quotes, else simulated ones.

        The snapshot is flagged degraded whenever it is not entirely live.
        """
        wanted = self._normalize(symbols)
        try:
            return await self.fetch_live(category, wanted)
        except _PROVIDER_EXCEPTIONS as exc:
            _, detail = self._mappers[category].to_http(exc)
            logger.warning("Live %s fetch failed (%s); serving fallback", category.value, detail)

        cached = self._last_good[category]
        quotes = {sym: cached[sym] for sym in wanted if sym in cached}
        missing = [sym for sym in wanted if sym not in quotes]
        fallback = self._fallbacks.get(category)
        if missing and fallback is not None:
            for q in await fallback.fetch_quotes(missing):
                quotes[q.symbol] = q
        return QuoteSnapshot(
            category=category,
            quotes=quotes,
            fetched_at=utcnow(),
            degraded=True,
        )

    async def close(self) -> None:
        """Close all providers. Call from app lifespan shutdown."""
        for provider in (*self._providers.values(), *self._fallbacks.values()):
            try:
                await provider.close()
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("Error closing provider %s: %s", type(provider).__name__, exc)
