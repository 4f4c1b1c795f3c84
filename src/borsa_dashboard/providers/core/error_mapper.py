"""Domain concept for mapping provider exceptions to HTTP responses."""
import asyncio
from dataclasses import dataclass

import httpx

from borsa_dashboard.errors import UpstreamError


@dataclass(frozen=True)
class ProviderErrorMapper:
    """Maps provider/backend exceptions to HTTP (status_code, detail).

    Injected into the price service and poller so upstream failures carry a
    message naming the provider (e.g. "CoinGecko error") rather than a raw
    exception string.
    """

    resource_name: str = "Resource"
    api_name: str = "API"

    def to_http(
        self,
        exc: Exception,
        symbol: str | None = None,
    ) -> tuple[int, str]:
        """Map a provider exception to (status_code, detail) for HTTP responses.

        Args:
            exc: The exception raised by the provider or service.
            symbol: Optional symbol/identifier to include in detail (e.g. "THYAO").

        Returns:
            (status_code, detail) suitable for an error response.
        """
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            if status == 404:
                return (404, self._not_found(symbol))
            if status == 429:
                return (503, f"{self.api_name} rate limit reached")
            if status >= 500:
                return (502, f"{self.api_name} error")
            return (status, f"{self.api_name} error")
        if isinstance(exc, (asyncio.TimeoutError, TimeoutError, httpx.TimeoutException)):
            detail = "Request timed out"
            if symbol is not None:
                detail = f"Request to {self.api_name} timed out for '{symbol}'"
            return (504, detail)
        if isinstance(exc, (httpx.TransportError, OSError)):
            return (502, f"{self.api_name} unreachable")
        if isinstance(exc, (ValueError, KeyError, TypeError)):
            return (502, f"{self.api_name} returned an unexpected payload")
        return (500, "Internal server error")

    def _not_found(self, symbol: str | None) -> str:
        if symbol is None:
            return f"{self.resource_name} not found"
        return f"{self.resource_name} '{symbol}' not found"

    def raise_http(
        self,
        exc: Exception,
        symbol: str | None = None,
    ) -> None:
        """Map provider exception and raise UpstreamError. Never returns."""
        status_code, detail = self.to_http(exc, symbol=symbol)
        error = UpstreamError(detail)
        error.status_code = status_code
        raise error from exc
