"""Borsa dashboard backend: BIST and crypto prices, tier gating and account workflows."""
