"""Catalog and exclusion endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Query, Request

from nutrition_coach.api.schemas import (
    ImportProductBody,
    ProductExclusionBody,
    TagExclusionBody,
    envelope,
    serialize_catalog_product,
    serialize_exclusions,
    serialize_tag,
)
from nutrition_coach.services.catalog import SearchSource

if TYPE_CHECKING:
    from nutrition_coach.containers import AppContainer

router = APIRouter(prefix="/api/nutrition", tags=["nutrition"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/tags")
async def list_tags(request: Request) -> dict[str, object]:
    """Return all tags grouped client-side by type."""
    tags = _container(request).catalog_service.list_tags()
    return envelope({"tags": [serialize_tag(tag) for tag in tags]})


@router.get("/products/search")
async def search_products(
    request: Request,
    q: str = "",
    source: SearchSource = SearchSource.ALL,
    limit: int = Query(default=20, ge=1, le=50),
) -> dict[str, object]:
    """Search the local catalog and OpenFoodFacts."""
    products = await _container(request).catalog_service.search(q, source, limit)
    return envelope(
        {
            "products": [serialize_catalog_product(p) for p in products],
            "total": len(products),
        }
    )


@router.post("/products/import")
async def import_product(
    body: ImportProductBody, request: Request
) -> dict[str, object]:
    """Import an OpenFoodFacts product into the local catalog."""
    result = await _container(request).catalog_service.import_product(
        body.code, user_id=body.user_id
    )
    return envelope(
        {
            "product_id": str(result.product_id),
            "imported": not result.already_exists,
            "already_exists": result.already_exists,
        }
    )


@router.get("/exclusions/{user_id}")
async def get_exclusions(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's excluded products and tags."""
    exclusions = _container(request).exclusion_service.list_exclusions(user_id)
    return envelope(serialize_exclusions(exclusions))


@router.post("/exclusions/product")
async def add_product_exclusion(
    body: ProductExclusionBody, request: Request
) -> dict[str, object]:
    """Exclude a product; repeated calls are no-ops."""
    service = _container(request).exclusion_service
    service.add_product_exclusion(body.user_id, body.product_id)
    return envelope(serialize_exclusions(service.list_exclusions(body.user_id)))


@router.delete("/exclusions/{user_id}/product/{product_id}")
async def remove_product_exclusion(
    user_id: UUID, product_id: UUID, request: Request
) -> dict[str, object]:
    """Remove a product exclusion if present."""
    _container(request).exclusion_service.remove_product_exclusion(user_id, product_id)
    return envelope()


@router.post("/exclusions/tag")
async def add_tag_exclusion(
    body: TagExclusionBody, request: Request
) -> dict[str, object]:
    """Exclude a tag; repeated calls are no-ops."""
    _container(request).exclusion_service.add_tag_exclusion(body.user_id, body.tag_id)
    return envelope()


@router.delete("/exclusions/{user_id}/tag/{tag_id}")
async def remove_tag_exclusion(
    user_id: UUID, tag_id: UUID, request: Request
) -> dict[str, object]:
    """Remove a tag exclusion if present."""
    _container(request).exclusion_service.remove_tag_exclusion(user_id, tag_id)
    return envelope()
