"""
Tests for merging live quotes onto the catalog
"""
from datetime import datetime, timedelta, timezone

from borsa_dashboard.db import Category
from borsa_dashboard.schemas import LiveQuote
from borsa_dashboard.services import merge

T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def quote(symbol, price, *, at=T0, category=Category.EQUITY, **kwargs):
    return LiveQuote(symbol=symbol, category=category, price=price, change_pct=1.0,
                     fetched_at=at, **kwargs)


def test_one_record_per_catalog_entry_in_order(catalog):
    stocks = catalog.instruments(Category.EQUITY)

    merged = merge(stocks, [quote("THYAO", 300.0), quote("ASELS", 50.0)])

    assert [m.symbol for m in merged] == [i.symbol for i in stocks]
    assert merged[0].price == 50.0 and merged[0].is_live
    assert merged[2].price == 300.0 and merged[2].quoted_at == T0


def test_quotes_outside_catalog_are_ignored(catalog):
    stocks = catalog.instruments(Category.EQUITY)

    merged = merge(stocks, {"ZZZZ": quote("ZZZZ", 1.0)})

    assert len(merged) == len(stocks)
    assert "ZZZZ" not in {m.symbol for m in merged}
    assert not any(m.is_live for m in merged)


def test_missing_quote_keeps_static_values(catalog):
    merged = merge(catalog.instruments(Category.EQUITY), None)

    asels = merged[0]
    assert asels.price == 45.80
    assert asels.change_pct == 2.3
    assert asels.is_live is False
    assert asels.quoted_at is None


def test_quote_without_volume_keeps_catalog_volume(catalog):
    asels = catalog.get("ASELS")

    merged = merge([asels], [quote("ASELS", 47.0, volume=None, market_cap=None)])

    assert merged[0].volume == asels.volume
    assert merged[0].market_cap == asels.market_cap
    assert merged[0].prediction == asels.prediction


def test_older_quote_does_not_replace_displayed(catalog):
    asels = catalog.get("ASELS")
    displayed = {m.symbol: m for m in merge([asels], [quote("ASELS", 48.0)])}

    merged = merge([asels], [quote("ASELS", 46.0, at=T0 - timedelta(seconds=5))], displayed)

    assert merged[0].price == 48.0


def test_displayed_live_record_survives_empty_snapshot(catalog):
    asels = catalog.get("ASELS")
    displayed = {m.symbol: m for m in merge([asels], [quote("ASELS", 48.0)])}

    merged = merge([asels], {}, displayed)

    assert merged[0].price == 48.0
    assert merged[0].is_live
