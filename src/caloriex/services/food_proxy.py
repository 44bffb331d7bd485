"""Cached passthrough to USDA FoodData Central for the remote search endpoint."""

import logging
from dataclasses import dataclass

from caloriex.adapters.fdc_client import FdcClient
from caloriex.services.cache import Cache

_logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 25


class FoodProxyError(Exception):
    """Base error for the remote nutrition proxy."""


class FoodProxyNotConfiguredError(FoodProxyError):
    """Raised when no FDC API key is configured."""

    def __init__(self) -> None:
        super().__init__("USDA API key not configured")


class FoodProxyUpstreamError(FoodProxyError):
    """Raised when FoodData Central fails."""


@dataclass
class FoodProxyService:
    """Serves FDC search and detail lookups with response caching."""

    fdc_client: FdcClient | None
    cache: Cache
    ttl_seconds: int = 3600
    debug: bool = False

    async def search(self, query: str) -> dict[str, object]:
        """Return the FDC search payload for ``query``."""
        client = self._require_client()
        cache_key = f"search-{query}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, dict):
            if self.debug:
                _logger.info("Using cached data for %s", cache_key)
            return cached
        try:
            payload = await client.search_foods(query, page_size=SEARCH_PAGE_SIZE)
        except Exception as exc:
            raise FoodProxyUpstreamError(_describe(exc)) from exc
        self.cache.set(cache_key, payload, ttl_seconds=self.ttl_seconds)
        return payload

    async def details(self, fdc_id: str) -> dict[str, object]:
        """Return the FDC food payload for ``fdc_id``."""
        client = self._require_client()
        cache_key = f"details-{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, dict):
            if self.debug:
                _logger.info("Using cached data for %s", cache_key)
            return cached
        try:
            payload = await client.get_food(fdc_id)
        except Exception as exc:
            raise FoodProxyUpstreamError(_describe(exc)) from exc
        self.cache.set(cache_key, payload, ttl_seconds=self.ttl_seconds)
        return payload

    def _require_client(self) -> FdcClient:
        if self.fdc_client is None:
            raise FoodProxyNotConfiguredError
        return self.fdc_client


def _describe(exc: Exception) -> str:
    """Return a short message for an upstream failure."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return f"USDA API error: {status_code}"
    return str(exc) or "Failed to fetch data from USDA API"
