"""OpenFoodFacts API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_SEARCH_FIELDS = (
    "code,product_name,product_name_ru,brands,nutriments,categories_tags"
)


class OpenFoodFactsClient(Protocol):
    """Interface for OpenFoodFacts lookups."""

    async def search_products(
        self, query: str, page_size: int = 20
    ) -> dict[str, object]:
        """Search products by free text and return raw API data."""

    async def get_product(self, code: str) -> dict[str, object]:
        """Fetch a product by barcode and return raw API data."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed OpenFoodFacts client."""

    base_url: str
    http_client: httpx.AsyncClient
    country: str = "ru"
    language: str = "ru"

    @classmethod
    def create(cls, base_url: str) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def search_products(
        self, query: str, page_size: int = 20
    ) -> dict[str, object]:
        """Search products using the legacy CGI search endpoint."""
        response = await self.http_client.get(
            f"{self.base_url}/cgi/search.pl",
            params={
                "search_terms": query,
                "search_simple": 1,
                "action": "process",
                "json": 1,
                "page_size": page_size,
                "cc": self.country,
                "lc": self.language,
                "fields": _SEARCH_FIELDS,
            },
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def get_product(self, code: str) -> dict[str, object]:
        """Fetch a single product by barcode."""
        response = await self.http_client.get(
            f"{self.base_url}/api/v0/product/{code}.json",
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
