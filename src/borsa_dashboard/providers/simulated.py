"""Simulated quote provider used when a live source is unavailable."""
import random

from borsa_dashboard.catalog import ReferenceCatalog
from borsa_dashboard.db import Category
from borsa_dashboard.providers.core import (QuoteProviderABC,
                                            normalize_symbol, round2)
from borsa_dashboard.schemas import LiveQuote
from borsa_dashboard.utils import utcnow


class SimulatedProvider(QuoteProviderABC):
    """Quotes jittered around the catalog baseline.

    Never fails; symbols missing from the catalog (or from another
    category) are omitted like an upstream would omit them.
    """

    api_name = "Simulated feed"

    def __init__(
        self,
        catalog: ReferenceCatalog,
        category: Category,
        *,
        price_jitter: float = 0.02,
        change_jitter: float = 1.0,
        rng: random.Random | None = None,
    ) -> None:
        self.category = category
        self._catalog = catalog
        self._price_jitter = price_jitter
        self._change_jitter = change_jitter
        self._rng = rng or random.Random()

    async def fetch_quotes(self, symbols: list[str]) -> list[LiveQuote]:
        now = utcnow()
        quotes: list[LiveQuote] = []
        for sym in dict.fromkeys(normalize_symbol(s) for s in symbols):
            inst = self._catalog.get(sym)
            if inst is None or inst.category != self.category:
                continue
            factor = 1 + self._rng.uniform(-self._price_jitter, self._price_jitter)
            quotes.append(
                LiveQuote(
                    symbol=sym,
                    category=self.category,
                    price=round2(inst.price * factor),
                    change_pct=round2(
                        inst.change_pct + self._rng.uniform(-self._change_jitter, self._change_jitter)
                    ),
                    volume=round2(inst.volume * self._rng.uniform(0.8, 1.2)),
                    market_cap=round2(inst.market_cap * factor),
                    fetched_at=now,
                )
            )
        return quotes
