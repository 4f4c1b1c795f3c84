"""Overlay live quotes onto catalog instruments."""
from collections.abc import Iterable, Mapping

from borsa_dashboard.schemas import Instrument, LiveQuote, MergedInstrument
from borsa_dashboard.utils import as_utc


def _static(inst: Instrument) -> MergedInstrument:
    return MergedInstrument(
        symbol=inst.symbol,
        name=inst.name,
        category=inst.category,
        sector=inst.sector,
        price=inst.price,
        change_pct=inst.change_pct,
        volume=inst.volume,
        market_cap=inst.market_cap,
        prediction=inst.prediction,
        confidence=inst.confidence,
        sentiment=inst.sentiment,
    )


def _overlay(base: MergedInstrument, quote: LiveQuote) -> MergedInstrument:
    update = {
        "price": quote.price,
        "change_pct": quote.change_pct,
        "is_live": True,
        "quoted_at": quote.fetched_at,
    }
    if quote.volume is not None:
        update["volume"] = quote.volume
    if quote.market_cap is not None:
        update["market_cap"] = quote.market_cap
    return base.model_copy(update=update)


def merge(
    catalog: Iterable[Instrument],
    quotes: Mapping[str, LiveQuote] | Iterable[LiveQuote] | None,
    displayed: Mapping[str, MergedInstrument] | None = None,
) -> list[MergedInstrument]:
    """Merge catalog entries with the latest quotes. Pure; never raises on missing data.

    Output has exactly one record per catalog entry, in catalog order. Quotes
    for symbols outside the catalog are ignored. When ``displayed`` is given,
    a quote older than the one already displayed for that symbol leaves the
    displayed record in place.
    """
    if quotes is None:
        by_symbol: Mapping[str, LiveQuote] = {}
    elif isinstance(quotes, Mapping):
        by_symbol = quotes
    else:
        by_symbol = {q.symbol: q for q in quotes}
    shown = displayed or {}

    merged: list[MergedInstrument] = []
    for inst in catalog:
        current = shown.get(inst.symbol)
        quote = by_symbol.get(inst.symbol)
        if quote is None:
            merged.append(current if current is not None and current.is_live else _static(inst))
            continue
        if (
            current is not None
            and current.quoted_at is not None
            and as_utc(quote.fetched_at) < as_utc(current.quoted_at)
        ):
            merged.append(current)
            continue
        merged.append(_overlay(_static(inst), quote))
    return merged
