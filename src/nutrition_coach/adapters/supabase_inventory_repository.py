"""Supabase repository for the inventory ledger."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from nutrition_coach.domain.inventory import InventoryItem, InventoryLocation
from nutrition_coach.services.inventory import InventoryRepository

_ITEM_COLUMNS = (
    "id, user_id, product_id, quantity_grams, quantity_units, location, "
    "expiry_date, products(name)"
)


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase-backed inventory rows in user_inventory."""

    client: Client

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> InventoryItem:
        """Insert a new inventory row and return it with its product name."""
        response = (
            self.client.table("user_inventory")
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create inventory item")
        created = response.data[0]
        joined = (
            self.client.table("user_inventory")
            .select(_ITEM_COLUMNS)
            .eq("id", str(created["id"]))
            .limit(1)
            .execute()
        )
        return _parse_item(joined.data[0] if joined.data else created)

    def update_quantity(
        self, user_id: UUID, item_id: UUID, quantity_grams: float
    ) -> InventoryItem | None:
        """Overwrite the gram quantity of a user's item."""
        response = (
            self.client.table("user_inventory")
            .update(
                {
                    "quantity_grams": quantity_grams,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(item_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def delete_item(self, user_id: UUID, item_id: UUID) -> bool:
        """Delete a user's item and report whether a row was removed."""
        response = (
            self.client.table("user_inventory")
            .delete()
            .eq("id", str(item_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def list_items(self, user_id: UUID) -> list[InventoryItem]:
        """Return a user's items, newest first."""
        response = (
            self.client.table("user_inventory")
            .select(_ITEM_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None


def _parse_item(row: dict[str, object]) -> InventoryItem:
    """Parse a user_inventory row into a domain model."""
    expiry_raw = row.get("expiry_date")
    product = row.get("products")
    return InventoryItem(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        product_id=UUID(str(row["product_id"])),
        location=InventoryLocation(row.get("location") or InventoryLocation.OTHER),
        quantity_grams=_optional_float(row.get("quantity_grams")),
        quantity_units=_optional_float(row.get("quantity_units")),
        expiry_date=(
            date.fromisoformat(expiry_raw)
            if isinstance(expiry_raw, str) and expiry_raw
            else None
        ),
        product_name=product.get("name") if isinstance(product, dict) else None,
    )
