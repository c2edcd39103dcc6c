"""Request bodies and response serializers for the HTTP API."""

from dataclasses import asdict
from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nutrition_coach.domain.catalog import CatalogProduct, Product, Tag
from nutrition_coach.domain.exclusions import UserExclusions
from nutrition_coach.domain.inventory import (
    DEFAULT_QUANTITY_GRAMS,
    InventoryItem,
    InventoryLocation,
)
from nutrition_coach.domain.meal_plans import MealPlan, ShoppingList


class CamelModel(BaseModel):
    """Accepts camelCase keys from the Mini App, snake_case from scripts."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductExclusionBody(CamelModel):
    user_id: UUID
    product_id: UUID


class TagExclusionBody(CamelModel):
    user_id: UUID
    tag_id: UUID


class ImportProductBody(CamelModel):
    code: str = Field(min_length=1)
    user_id: UUID | None = None


class AddInventoryItemBody(CamelModel):
    product_id: UUID
    quantity_grams: float | None = DEFAULT_QUANTITY_GRAMS
    quantity_units: float | None = None
    location: InventoryLocation = InventoryLocation.FRIDGE
    expiry_date: date | None = None


class UpdateInventoryItemBody(CamelModel):
    quantity_grams: float


class GenerateMealPlanBody(CamelModel):
    weeks: int = 4
    allow_repeat_days: int = 3
    prefer_simple: bool = True
    use_inventory: bool = False


def envelope(data: object = None) -> dict[str, object]:
    """Wrap a successful payload."""
    return {"success": True, "data": data}


def error_envelope(message: str) -> dict[str, object]:
    """Wrap a failure message."""
    return {"success": False, "error": message}


def serialize_product(product: Product) -> dict[str, object]:
    payload = asdict(product)
    payload["id"] = str(product.id)
    return payload


def serialize_catalog_product(product: CatalogProduct) -> dict[str, object]:
    payload = asdict(product)
    payload["id"] = str(product.id) if product.id else None
    payload["source"] = product.source.value
    return payload


def serialize_tag(tag: Tag) -> dict[str, object]:
    return {
        "id": str(tag.id),
        "name": tag.name,
        "name_ru": tag.name_ru,
        "type": str(tag.type),
        "description": tag.description,
    }


def serialize_exclusions(exclusions: UserExclusions) -> dict[str, object]:
    return {
        "products": [serialize_product(product) for product in exclusions.products],
        "tags": [serialize_tag(tag) for tag in exclusions.tags],
    }


def serialize_inventory_item(item: InventoryItem) -> dict[str, object]:
    return {
        "id": str(item.id),
        "user_id": str(item.user_id),
        "product_id": str(item.product_id),
        "product_name": item.product_name,
        "quantity_grams": item.quantity_grams,
        "quantity_units": item.quantity_units,
        "location": item.location.value,
        "expiry_date": item.expiry_date.isoformat() if item.expiry_date else None,
    }


def serialize_inventory(
    grouped: dict[InventoryLocation, list[InventoryItem]],
) -> dict[str, object]:
    return {
        location.value: [serialize_inventory_item(item) for item in items]
        for location, items in grouped.items()
    }


def serialize_meal_plan(plan: MealPlan) -> dict[str, object]:
    """Serialize a plan; UUIDs become strings via the JSON encoder."""
    payload = asdict(plan)
    return {
        "plan": {key: value for key, value in payload.items() if key != "days"},
        "days": payload["days"],
    }


def serialize_shopping_list(shopping_list: ShoppingList) -> dict[str, object]:
    """Serialize a shopping list; week keys become strings in JSON."""
    return {
        "meal_plan_id": str(shopping_list.meal_plan_id),
        "monthly": [asdict(item) for item in shopping_list.monthly],
        "weekly": {
            str(week): [asdict(item) for item in items]
            for week, items in shopping_list.weekly.items()
        },
    }
