"""News feed service: tier check plus a short per-symbol cache."""
import logging
from datetime import datetime, timedelta

from borsa_dashboard.catalog import ReferenceCatalog
from borsa_dashboard.db import Tier
from borsa_dashboard.errors import NotFound
from borsa_dashboard.providers import NewsProvider, ProviderErrorMapper
from borsa_dashboard.schemas import NewsItem, NewsRequest
from borsa_dashboard.services.entitlements import Feature, require
from borsa_dashboard.utils import utcnow

logger = logging.getLogger(__name__)


class NewsService:
    """Serves headlines for catalog instruments to tiers that unlock the news feed."""

    def __init__(
        self,
        provider: NewsProvider,
        catalog: ReferenceCatalog,
        *,
        ttl_seconds: float,
    ) -> None:
        self._provider = provider
        self._catalog = catalog
        self._ttl = timedelta(seconds=ttl_seconds)
        self._error_mapper = ProviderErrorMapper(resource_name="News", api_name=provider.api_name)
        self._cache: dict[str, tuple[datetime, list[NewsItem]]] = {}

    async def get_news(self, request: NewsRequest, tier: Tier | None) -> list[NewsItem]:
        require(tier, Feature.NEWS)
        inst = self._catalog.get(request.symbol)
        if inst is None:
            raise NotFound(f"Instrument '{request.symbol}' not found")

        now = utcnow()
        cached = self._cache.get(inst.symbol)
        if cached is not None and now - cached[0] < self._ttl:
            return cached[1]
        try:
            items = await self._provider.get_news(inst.symbol, request.name or inst.name, inst.category)
        except Exception as exc:  # pylint: disable=broad-except
            if cached is not None:
                logger.warning("News refresh for %s failed, serving cached: %s", inst.symbol, exc)
                return cached[1]
            self._error_mapper.raise_http(exc, symbol=inst.symbol)
        self._cache[inst.symbol] = (now, items)
        return items
