"""Domain models for the user inventory ledger."""

import re
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID

DEFAULT_QUANTITY_GRAMS = 500

_NON_DIGITS = re.compile(r"\D")


class InventoryLocation(StrEnum):
    """Storage location an item is kept in."""

    FRIDGE = "fridge"
    FREEZER = "freezer"
    PANTRY = "pantry"
    OTHER = "other"


@dataclass(frozen=True)
class InventoryItem:
    """A stocked product owned by a single user."""

    id: UUID
    user_id: UUID
    product_id: UUID
    location: InventoryLocation
    quantity_grams: float | None
    quantity_units: float | None = None
    expiry_date: date | None = None
    product_name: str | None = None


@dataclass(frozen=True)
class StockLevel:
    """Quantity of a product available to the meal-plan generator."""

    product_id: UUID
    quantity_grams: float


def clamp_quantity(quantity_grams: float | None) -> float | None:
    """Clamp a gram quantity to be non-negative, keeping None as None."""
    if quantity_grams is None:
        return None
    return max(0, quantity_grams)


def parse_quantity_input(raw: str) -> int | None:
    """Strip everything but digits from typed input.

    Returns None when nothing numeric is left so the caller can reject it.
    """
    digits = _NON_DIGITS.sub("", raw)
    if not digits:
        return None
    return int(digits)


def partition_by_location(
    items: list[InventoryItem],
) -> dict[InventoryLocation, list[InventoryItem]]:
    """Group items by location, always including every location."""
    grouped: dict[InventoryLocation, list[InventoryItem]] = {
        location: [] for location in InventoryLocation
    }
    for item in items:
        grouped[item.location].append(item)
    return grouped
