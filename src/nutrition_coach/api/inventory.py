"""Inventory ledger endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request

from nutrition_coach.api.schemas import (
    AddInventoryItemBody,
    UpdateInventoryItemBody,
    envelope,
    serialize_inventory,
    serialize_inventory_item,
)
from nutrition_coach.domain.errors import NotFoundError

if TYPE_CHECKING:
    from nutrition_coach.containers import AppContainer

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("/{user_id}")
async def get_inventory(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's inventory grouped by location."""
    container: AppContainer = request.app.state.container
    grouped = container.inventory_service.list_inventory(user_id)
    return envelope({"inventory": serialize_inventory(grouped)})


@router.post("/{user_id}")
async def add_inventory_item(
    user_id: UUID, body: AddInventoryItemBody, request: Request
) -> dict[str, object]:
    """Add a product to the inventory as a new row."""
    container: AppContainer = request.app.state.container
    item = container.inventory_service.add_item(
        user_id,
        body.product_id,
        quantity_grams=body.quantity_grams,
        location=body.location,
        quantity_units=body.quantity_units,
        expiry_date=body.expiry_date,
    )
    return envelope(serialize_inventory_item(item))


@router.put("/{user_id}/{item_id}")
async def update_inventory_item(
    user_id: UUID, item_id: UUID, body: UpdateInventoryItemBody, request: Request
) -> dict[str, object]:
    """Overwrite an item's gram quantity."""
    container: AppContainer = request.app.state.container
    item = container.inventory_service.update_item_quantity(
        user_id, item_id, body.quantity_grams
    )
    if item is None:
        raise NotFoundError("Inventory item not found")
    return envelope(serialize_inventory_item(item))


@router.delete("/{user_id}/{item_id}")
async def delete_inventory_item(
    user_id: UUID, item_id: UUID, request: Request
) -> dict[str, object]:
    """Delete an item; deleting a missing item reports not-found."""
    container: AppContainer = request.app.state.container
    if not container.inventory_service.delete_item(user_id, item_id):
        raise NotFoundError("Inventory item not found")
    return envelope()
