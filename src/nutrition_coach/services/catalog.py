"""Product catalog service backed by the local store and OpenFoodFacts."""

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from nutrition_coach.adapters.openfoodfacts_client import OpenFoodFactsClient
from nutrition_coach.domain.catalog import (
    CatalogProduct,
    ImportResult,
    Product,
    ProductSource,
    Tag,
    detect_category,
)
from nutrition_coach.domain.errors import (
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from nutrition_coach.services.cache import Cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

MIN_QUERY_LENGTH = 2

_logger = logging.getLogger(__name__)


class SearchSource(StrEnum):
    """Which catalogs a search consults."""

    LOCAL = "local"
    OPENFOODFACTS = "openfoodfacts"
    ALL = "all"


class CatalogRepository(Protocol):
    """Persistence interface for products and tags."""

    def search_products(self, query: str, limit: int) -> list[Product]:
        """Search local products by name."""

    def get_by_openfoodfacts_code(self, code: str) -> Product | None:
        """Return a previously imported product, if present."""

    def create_product(self, payload: dict[str, object]) -> Product:
        """Insert a product and return it."""

    def list_tags(self) -> list[Tag]:
        """Return all tags ordered by type then name."""


@dataclass
class CatalogService:
    """Search and import products, list tags."""

    repository: CatalogRepository
    openfoodfacts_client: OpenFoodFactsClient | None
    cache: Cache
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    @property
    def external_enabled(self) -> bool:
        """Return True when OpenFoodFacts lookups are configured."""
        return self.openfoodfacts_client is not None

    def list_tags(self) -> list[Tag]:
        """Return every tag for the exclusion picker."""
        return self.repository.list_tags()

    async def search(
        self,
        query: str,
        source: SearchSource = SearchSource.ALL,
        limit: int = 20,
    ) -> list[CatalogProduct]:
        """Search local products first, then fill up from OpenFoodFacts."""
        cleaned = query.strip()
        if len(cleaned) < MIN_QUERY_LENGTH:
            raise ValidationError(
                f"Query must be at least {MIN_QUERY_LENGTH} characters long"
            )

        results: list[CatalogProduct] = []
        if source in {SearchSource.LOCAL, SearchSource.ALL}:
            local = self.repository.search_products(cleaned, limit)
            results.extend(CatalogProduct.from_product(product) for product in local)

        wants_external = source in {SearchSource.OPENFOODFACTS, SearchSource.ALL}
        if wants_external and self.external_enabled and len(results) < limit:
            results.extend(await self._search_external(cleaned, limit - len(results)))

        return results[:limit]

    async def import_product(
        self, code: str, user_id: UUID | None = None
    ) -> ImportResult:
        """Copy an OpenFoodFacts product into the local catalog."""
        existing = self.repository.get_by_openfoodfacts_code(code)
        if existing is not None:
            _logger.info("Product already imported: code=%s", code)
            return ImportResult(product_id=existing.id, already_exists=True)

        client = self.openfoodfacts_client
        if client is None:
            raise ServiceUnavailableError("Product catalog import is not available")

        payload = await self._call_with_retry(
            lambda: client.get_product(code), action=f"get_product:{code}"
        )
        raw = payload.get("product")
        if not isinstance(raw, dict):
            raise NotFoundError("Product not found in OpenFoodFacts")

        hit = _parse_external(raw)
        if hit is None:
            raise NotFoundError("Product has no name in OpenFoodFacts")

        created = self.repository.create_product(
            {
                "openfoodfacts_code": code,
                "name": hit.name,
                "brand": hit.brand,
                "calories": hit.calories,
                "protein": hit.protein,
                "fat": hit.fat,
                "carbs": hit.carbs,
                "fiber": hit.fiber,
                "category": hit.category,
                "is_perishable": True,
                "cooking_ratio": 1.0,
                "imported_by_user_id": str(user_id) if user_id else None,
            }
        )
        _logger.info("Imported product: code=%s product_id=%s", code, created.id)
        return ImportResult(product_id=created.id, already_exists=False)

    async def _search_external(self, query: str, limit: int) -> list[CatalogProduct]:
        client = self.openfoodfacts_client
        if client is None:
            return []
        cache_key = f"off:search:{query.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        try:
            payload = await self._call_with_retry(
                lambda: client.search_products(query, page_size=limit),
                action="search",
            )
        except Exception:
            _logger.exception("OpenFoodFacts search failed", extra={"query": query})
            return []

        hits = [
            hit
            for hit in (_parse_external(raw) for raw in payload.get("products") or [])
            if hit is not None
        ]
        self.cache.set(cache_key, hits, ttl_seconds=self.search_ttl_seconds)
        _logger.info("OpenFoodFacts search: query=%s results=%s", query, len(hits))
        return hits

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "OpenFoodFacts %s failed (attempt %s/%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _round_tenth(value: object) -> float:
    return round(float(value or 0) * 10) / 10


def _parse_external(raw: dict[str, object]) -> CatalogProduct | None:
    """Convert an OpenFoodFacts product; products without a name are skipped."""
    name = raw.get("product_name_ru") or raw.get("product_name")
    nutriments = raw.get("nutriments")
    if not name or not isinstance(nutriments, dict):
        return None
    return CatalogProduct(
        name=str(name),
        brand=raw.get("brands") or None,
        calories=float(round(float(nutriments.get("energy-kcal_100g") or 0))),
        protein=_round_tenth(nutriments.get("proteins_100g")),
        fat=_round_tenth(nutriments.get("fat_100g")),
        carbs=_round_tenth(nutriments.get("carbohydrates_100g")),
        fiber=_round_tenth(nutriments.get("fiber_100g")),
        category=detect_category(list(raw.get("categories_tags") or [])),
        source=ProductSource.OPENFOODFACTS,
        openfoodfacts_code=str(raw["code"]) if raw.get("code") else None,
    )
