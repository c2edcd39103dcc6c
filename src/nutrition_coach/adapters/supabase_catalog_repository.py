"""Supabase implementation for products and tags."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrition_coach.domain.catalog import Product, Tag, parse_tag_type
from nutrition_coach.services.catalog import CatalogRepository

_PRODUCT_COLUMNS = (
    "id, name, brand, calories, protein, fat, carbs, fiber, category, unit, "
    "openfoodfacts_code"
)


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed product catalog."""

    client: Client

    def search_products(self, query: str, limit: int) -> list[Product]:
        """Search active products by name, prefix matches first."""
        response = (
            self.client.table("products")
            .select(_PRODUCT_COLUMNS)
            .ilike("name", f"%{query}%")
            .eq("is_active", True)
            .order("name")
            .limit(limit)
            .execute()
        )
        products = [parse_product(row) for row in response.data or []]
        prefix = query.lower()
        return sorted(
            products, key=lambda product: not product.name.lower().startswith(prefix)
        )

    def get_by_openfoodfacts_code(self, code: str) -> Product | None:
        """Return a previously imported product, if present."""
        response = (
            self.client.table("products")
            .select(_PRODUCT_COLUMNS)
            .eq("openfoodfacts_code", code)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_product(response.data[0])

    def create_product(self, payload: dict[str, object]) -> Product:
        """Insert a product and return it."""
        response = self.client.table("products").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create product")
        return parse_product(response.data[0])

    def list_tags(self) -> list[Tag]:
        """Return all tags ordered by type then name."""
        response = (
            self.client.table("tags")
            .select("id, name, name_ru, type, description")
            .order("type")
            .order("name")
            .execute()
        )
        return [parse_tag(row) for row in response.data or []]


def parse_product(row: dict[str, object]) -> Product:
    """Parse a products row into a domain model."""
    return Product(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        brand=row.get("brand"),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        fat=float(row.get("fat") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fiber=float(row.get("fiber") or 0.0),
        category=str(row.get("category") or "other"),
        unit=str(row.get("unit") or "г"),
        openfoodfacts_code=row.get("openfoodfacts_code"),
    )


def parse_tag(row: dict[str, object]) -> Tag:
    """Parse a tags row into a domain model."""
    return Tag(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        name_ru=str(row.get("name_ru") or row.get("name", "")),
        type=parse_tag_type(row.get("type")),
        description=row.get("description"),
    )
