"""Client for the remote nutrition search endpoint."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class FoodSearchProxyClient(Protocol):
    """Interface for the remote nutrition search API."""

    async def search(self, query: str) -> dict[str, object]:
        """Search remote foods and return the raw JSON body."""


@dataclass
class HttpxFoodSearchProxyClient(FoodSearchProxyClient):
    """HTTPX-backed client for ``GET ?action=search&query=<term>``."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, url: str, timeout_seconds: float = 15
    ) -> "HttpxFoodSearchProxyClient":
        """Create a proxy client with a managed httpx session."""
        return cls(
            url=url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search(self, query: str) -> dict[str, object]:
        """Search remote foods by query."""
        response = await self.http_client.get(
            self.url,
            params={"action": "search", "query": query},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise RuntimeError("Unexpected remote search payload")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
