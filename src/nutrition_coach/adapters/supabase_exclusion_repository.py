"""Supabase repository for user exclusions."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrition_coach.adapters.supabase_catalog_repository import (
    parse_product,
    parse_tag,
)
from nutrition_coach.domain.exclusions import UserExclusions
from nutrition_coach.services.exclusions import ExclusionRepository


@dataclass
class SupabaseExclusionRepository(ExclusionRepository):
    """Supabase-backed exclusion sets keyed by (user_id, product_id|tag_id)."""

    client: Client

    def add_product(self, user_id: UUID, product_id: UUID) -> None:
        """Insert a product exclusion, ignoring duplicates."""
        self.client.table("user_excluded_products").upsert(
            {"user_id": str(user_id), "product_id": str(product_id)},
            on_conflict="user_id,product_id",
            ignore_duplicates=True,
        ).execute()

    def remove_product(self, user_id: UUID, product_id: UUID) -> None:
        """Delete a product exclusion if present."""
        self.client.table("user_excluded_products").delete().eq(
            "user_id", str(user_id)
        ).eq("product_id", str(product_id)).execute()

    def add_tag(self, user_id: UUID, tag_id: UUID) -> None:
        """Insert a tag exclusion, ignoring duplicates."""
        self.client.table("user_excluded_tags").upsert(
            {"user_id": str(user_id), "tag_id": str(tag_id)},
            on_conflict="user_id,tag_id",
            ignore_duplicates=True,
        ).execute()

    def remove_tag(self, user_id: UUID, tag_id: UUID) -> None:
        """Delete a tag exclusion if present."""
        self.client.table("user_excluded_tags").delete().eq(
            "user_id", str(user_id)
        ).eq("tag_id", str(tag_id)).execute()

    def list_exclusions(self, user_id: UUID) -> UserExclusions:
        """Return excluded products and tags with their display fields."""
        products_response = (
            self.client.table("user_excluded_products")
            .select("product_id, products(*)")
            .eq("user_id", str(user_id))
            .execute()
        )
        tags_response = (
            self.client.table("user_excluded_tags")
            .select("tag_id, tags(*)")
            .eq("user_id", str(user_id))
            .execute()
        )
        return UserExclusions(
            products=[
                parse_product(row["products"])
                for row in products_response.data or []
                if row.get("products")
            ],
            tags=[
                parse_tag(row["tags"])
                for row in tags_response.data or []
                if row.get("tags")
            ],
        )
