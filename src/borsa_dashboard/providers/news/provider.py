"""Headline provider for instrument news.

There is no licensed news API behind this; headlines are rendered from
fixed templates and link to a news search for the instrument.
"""
import hashlib
from datetime import timedelta
from urllib.parse import quote_plus

from borsa_dashboard.db import Category
from borsa_dashboard.providers.news.models import HEADLINES
from borsa_dashboard.schemas import NewsItem
from borsa_dashboard.utils import utcnow

SEARCH_URL = "https://www.google.com/search?tbm=nws&q={query}"


class NewsProvider:
    """Builds a short headline list for one instrument."""

    api_name = "News API"

    async def get_news(self, symbol: str, name: str, category: Category) -> list[NewsItem]:
        kind = "cryptocurrency" if category == Category.CRYPTO else "stock market"
        url = SEARCH_URL.format(query=quote_plus(f"{name} {symbol} {kind} news latest"))
        now = utcnow()
        return [
            NewsItem(
                id=self._item_id(symbol, i),
                title=tpl.title.format(name=name, symbol=symbol),
                summary=tpl.summary.format(name=name, symbol=symbol),
                published_at=now - timedelta(hours=tpl.hours_ago),
                sentiment=tpl.sentiment,
                source=tpl.source,
                url=url,
            )
            for i, tpl in enumerate(HEADLINES, start=1)
        ]

    async def close(self) -> None:
        """Nothing to release."""

    @staticmethod
    def _item_id(symbol: str, index: int) -> str:
        return hashlib.sha1(f"{symbol}:{index}".encode()).hexdigest()[:12]
