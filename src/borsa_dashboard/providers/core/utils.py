"""Shared utilities for quote providers."""

DECIMALS = 2


def normalize_symbol(symbol: str) -> str:
    """Normalize a catalog ticker (trimmed, uppercase)."""
    return symbol.strip().upper()


def round2(x: float | None) -> float | None:
    """Round a value to 2 decimal places; preserve None."""
    if x is None:
        return None
    return round(float(x), DECIMALS)


def pct_change(price: float, previous: float | None) -> float:
    """Percent change from previous to price; 0 when previous is missing or zero."""
    if not previous:
        return 0.0
    return (price - previous) / previous * 100
