"""
Tests for the static instrument catalog
"""
import pytest

from borsa_dashboard.catalog import CRYPTO_ASSETS, TURKISH_STOCKS, ReferenceCatalog
from borsa_dashboard.db import Category
from borsa_dashboard.schemas import Prediction


def test_catalog_order_and_size(catalog):
    """Equities come first, in listing order, then crypto"""
    assert len(catalog) == len(TURKISH_STOCKS) + len(CRYPTO_ASSETS) == 32
    assert catalog.symbols(Category.EQUITY)[:3] == ["ASELS", "TUPRS", "THYAO"]
    assert catalog.symbols(Category.CRYPTO)[:2] == ["BTC", "ETH"]
    assert catalog.instruments()[0].symbol == "ASELS"


def test_asels_reference_values(catalog):
    asels = catalog.get("asels")

    assert asels.price == 45.80
    assert asels.change_pct == 2.3
    assert asels.prediction == Prediction.RISE
    assert asels.confidence == 78
    assert asels.sentiment == "Very Positive"


def test_lookup_is_case_insensitive(catalog):
    assert "btc" in catalog
    assert catalog.get("Eth").category == Category.CRYPTO
    assert catalog.get("NOPE") is None
    assert 42 not in catalog


def test_search_matches_symbol_and_name(catalog):
    assert [i.symbol for i in catalog.search("thy")] == ["THYAO"]
    assert "BTC" in [i.symbol for i in catalog.search("bitcoin")]
    assert catalog.search("   ") == []
    assert len(catalog.search("a", limit=3)) == 3


def test_duplicate_symbols_rejected():
    with pytest.raises(ValueError):
        ReferenceCatalog([TURKISH_STOCKS[0], TURKISH_STOCKS[0]])


def test_confidence_within_bounds(catalog):
    assert all(0 <= i.confidence <= 100 for i in catalog.instruments())
