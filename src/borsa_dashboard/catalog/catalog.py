"""Read-only lookup over the static instrument catalog."""
from collections.abc import Iterable

from borsa_dashboard.catalog.instruments import CRYPTO_ASSETS, TURKISH_STOCKS
from borsa_dashboard.db import Category
from borsa_dashboard.schemas import Instrument


class ReferenceCatalog:
    """Immutable instrument list with symbol lookup.

    Order is preserved as given; merged views follow it.
    """

    def __init__(self, instruments: Iterable[Instrument]) -> None:
        self._instruments = tuple(instruments)
        self._by_symbol: dict[str, Instrument] = {}
        for inst in self._instruments:
            if inst.symbol in self._by_symbol:
                raise ValueError(f"Duplicate catalog symbol '{inst.symbol}'")
            self._by_symbol[inst.symbol] = inst

    def __len__(self) -> int:
        return len(self._instruments)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol.upper() in self._by_symbol

    def instruments(self, category: Category | None = None) -> tuple[Instrument, ...]:
        if category is None:
            return self._instruments
        return tuple(i for i in self._instruments if i.category == category)

    def symbols(self, category: Category | None = None) -> list[str]:
        return [i.symbol for i in self.instruments(category)]

    def get(self, symbol: str) -> Instrument | None:
        return self._by_symbol.get(symbol.upper())

    def search(self, query: str, limit: int = 10) -> list[Instrument]:
        """Case-insensitive substring match on symbol or name."""
        needle = query.strip().casefold()
        if not needle:
            return []
        hits = [
            i for i in self._instruments
            if needle in i.symbol.casefold() or needle in i.name.casefold()
        ]
        return hits[:limit]


def default_catalog() -> ReferenceCatalog:
    """Catalog with every BIST equity followed by every crypto asset."""
    return ReferenceCatalog(TURKISH_STOCKS + CRYPTO_ASSETS)
