"""Abstract base class for quote providers."""
from abc import ABC, abstractmethod

from borsa_dashboard.db import Category
from borsa_dashboard.schemas import LiveQuote


class QuoteProviderABC(ABC):
    """Base interface for every price source (live APIs and the simulated fallback).

    Each provider serves exactly one category and returns quotes keyed by the
    catalog ticker, whatever identifiers the upstream API uses internally.
    """

    category: Category
    api_name: str = "API"

    @abstractmethod
    async def fetch_quotes(self, symbols: list[str]) -> list[LiveQuote]:
        """Fetch current quotes for the given catalog symbols.

        Symbols the upstream does not recognize are omitted from the result;
        that is not an error. Transport, HTTP and parse failures raise.

        Args:
            symbols: Catalog tickers (e.g. ["THYAO", "ASELS"] or ["BTC", "ETH"]).

        Returns:
            One LiveQuote per resolvable symbol, in no particular order.
        """

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "QuoteProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
