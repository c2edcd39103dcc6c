"""Inventory ledger service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from nutrition_coach.domain.inventory import (
    DEFAULT_QUANTITY_GRAMS,
    InventoryItem,
    InventoryLocation,
    StockLevel,
    clamp_quantity,
    partition_by_location,
)


class InventoryRepository(Protocol):
    """Persistence interface for inventory rows.

    Every method is scoped to the owning user.
    """

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> InventoryItem:
        """Insert a new row and return it."""

    def update_quantity(
        self, user_id: UUID, item_id: UUID, quantity_grams: float
    ) -> InventoryItem | None:
        """Overwrite an item's gram quantity, returning None when absent."""

    def delete_item(self, user_id: UUID, item_id: UUID) -> bool:
        """Delete an item and report whether it existed."""

    def list_items(self, user_id: UUID) -> list[InventoryItem]:
        """Return all items for a user."""


@dataclass
class InventoryService:
    """Application service for inventory operations."""

    repository: InventoryRepository

    def add_item(  # noqa: PLR0913
        self,
        user_id: UUID,
        product_id: UUID,
        quantity_grams: float | None = DEFAULT_QUANTITY_GRAMS,
        location: InventoryLocation = InventoryLocation.FRIDGE,
        quantity_units: float | None = None,
        expiry_date: date | None = None,
    ) -> InventoryItem:
        """Add a product to the inventory as a new row, never merging."""
        return self.repository.create_item(
            user_id,
            {
                "product_id": str(product_id),
                "quantity_grams": clamp_quantity(quantity_grams),
                "quantity_units": quantity_units,
                "location": InventoryLocation(location).value,
                "expiry_date": expiry_date.isoformat() if expiry_date else None,
            },
        )

    def update_item_quantity(
        self, user_id: UUID, item_id: UUID, quantity_grams: float
    ) -> InventoryItem | None:
        """Set an exact gram quantity; negative values are stored as zero."""
        return self.repository.update_quantity(
            user_id, item_id, clamp_quantity(quantity_grams)
        )

    def delete_item(self, user_id: UUID, item_id: UUID) -> bool:
        """Delete an item; returns False when it was already gone."""
        return self.repository.delete_item(user_id, item_id)

    def list_inventory(
        self, user_id: UUID
    ) -> dict[InventoryLocation, list[InventoryItem]]:
        """Return the user's items grouped by location."""
        return partition_by_location(self.repository.list_items(user_id))

    def snapshot(self, user_id: UUID) -> list[StockLevel]:
        """Return positive gram stock per item for meal-plan generation."""
        return [
            StockLevel(product_id=item.product_id, quantity_grams=item.quantity_grams)
            for item in self.repository.list_items(user_id)
            if item.quantity_grams is not None and item.quantity_grams > 0
        ]
