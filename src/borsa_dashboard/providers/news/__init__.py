"""Instrument news provider."""
from borsa_dashboard.providers.news.provider import NewsProvider

__all__ = ["NewsProvider"]
