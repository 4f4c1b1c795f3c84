"""
Tests for the news feed gate and cache
"""
import pytest

from borsa_dashboard.db import Category, Tier
from borsa_dashboard.errors import (AuthenticationRequired, FeatureLocked,
                                    NotFound, UpstreamError)
from borsa_dashboard.providers import NewsProvider
from borsa_dashboard.schemas import NewsRequest
from borsa_dashboard.services import NewsService


class CountingNews(NewsProvider):
    def __init__(self):
        self.calls = 0
        self.fail = False

    async def get_news(self, symbol, name, category):
        self.calls += 1
        if self.fail:
            raise OSError("feed down")
        return await super().get_news(symbol, name, category)


@pytest.fixture
def provider():
    return CountingNews()


@pytest.fixture
def news(provider, catalog):
    return NewsService(provider, catalog, ttl_seconds=300)


REQUEST = NewsRequest(symbol="asels", name="Aselsan", category=Category.EQUITY)


async def test_only_ultimate_gets_news(news):
    with pytest.raises(AuthenticationRequired):
        await news.get_news(REQUEST, None)
    with pytest.raises(FeatureLocked):
        await news.get_news(REQUEST, Tier.PRO)

    items = await news.get_news(REQUEST, Tier.ULTIMATE)
    assert len(items) == 4


async def test_items_cached_per_symbol(news, provider):
    await news.get_news(REQUEST, Tier.ULTIMATE)
    await news.get_news(REQUEST, Tier.ULTIMATE)

    assert provider.calls == 1


async def test_failure_without_cache_is_upstream_error(news, provider):
    provider.fail = True

    with pytest.raises(UpstreamError) as info:
        await news.get_news(REQUEST, Tier.ULTIMATE)
    assert info.value.status_code == 502


async def test_unknown_symbol(news):
    with pytest.raises(NotFound):
        await news.get_news(NewsRequest(symbol="NOPE", name="x", category=Category.EQUITY), Tier.ULTIMATE)
