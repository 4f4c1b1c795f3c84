"""Market board: live-merged instrument lists per category, gated by tier."""
import logging
from collections.abc import Mapping

from borsa_dashboard.catalog import ReferenceCatalog
from borsa_dashboard.db import Category, Tier
from borsa_dashboard.errors import NotFound
from borsa_dashboard.schemas import InstrumentView, MergedInstrument, QuoteSnapshot
from borsa_dashboard.services.entitlements import gate_instrument
from borsa_dashboard.services.merger import merge
from borsa_dashboard.services.poller import PricePoller
from borsa_dashboard.services.price_service import PriceService

logger = logging.getLogger(__name__)


class MarketBoard:
    """Keeps one poller per category and the currently displayed merge.

    The displayed list is recomputed whenever a poller applies a snapshot; a
    failed poll leaves it untouched and only marks the category stale.
    """

    def __init__(
        self,
        catalog: ReferenceCatalog,
        price_service: PriceService,
        intervals: Mapping[Category, float],
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        self._catalog = catalog
        self._prices = price_service
        self._displayed: dict[Category, dict[str, MergedInstrument]] = {}
        self.pollers: dict[Category, PricePoller] = {}
        for category, interval in intervals.items():
            poller = PricePoller(
                self._fetcher(category),
                interval,
                timeout_seconds=timeout_seconds,
                error_mapper=price_service.error_mapper(category),
                name=category.value,
            )
            poller.subscribe(lambda snap, c=category: self._on_snapshot(c, snap))
            self.pollers[category] = poller

    def _fetcher(self, category: Category):
        symbols = self._catalog.symbols(category)

        async def fetch() -> QuoteSnapshot:
            return await self._prices.fetch_live(category, symbols)

        return fetch

    def _on_snapshot(self, category: Category, snapshot: QuoteSnapshot) -> None:
        merged = merge(
            self._catalog.instruments(category),
            snapshot.quotes,
            displayed=self._displayed.get(category),
        )
        self._displayed[category] = {m.symbol: m for m in merged}
        logger.debug("Board %s updated with %d live quotes", category.value, len(snapshot.quotes))

    def start(self) -> None:
        for poller in self.pollers.values():
            poller.start()

    async def stop(self) -> None:
        for poller in self.pollers.values():
            await poller.aclose()

    def is_stale(self, category: Category) -> bool:
        poller = self.pollers.get(category)
        return poller is not None and poller.stale

    def merged(self, category: Category) -> list[MergedInstrument]:
        """Current merged list in catalog order; static values until the first poll lands."""
        return merge(
            self._catalog.instruments(category),
            None,
            displayed=self._displayed.get(category),
        )

    def view(self, category: Category, tier: Tier | None) -> list[InstrumentView]:
        stale = self.is_stale(category)
        return [gate_instrument(m, tier, stale=stale) for m in self.merged(category)]

    def instrument(self, symbol: str, tier: Tier | None) -> InstrumentView:
        inst = self._catalog.get(symbol)
        if inst is None:
            raise NotFound(f"Instrument '{symbol}' not found")
        for item in self.view(inst.category, tier):
            if item.symbol == inst.symbol:
                return item
        raise NotFound(f"Instrument '{symbol}' not found")
