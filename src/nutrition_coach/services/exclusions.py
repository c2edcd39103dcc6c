"""Services for per-user product and tag exclusions."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_coach.domain.catalog import CatalogProduct
from nutrition_coach.domain.errors import ValidationError
from nutrition_coach.domain.exclusions import UserExclusions
from nutrition_coach.services.catalog import CatalogService

_logger = logging.getLogger(__name__)


class ExclusionRepository(Protocol):
    """Persistence interface for exclusion sets.

    Adds must be no-ops for existing pairs and removes must be no-ops for
    missing pairs.
    """

    def add_product(self, user_id: UUID, product_id: UUID) -> None:
        """Insert a product exclusion unless it already exists."""

    def remove_product(self, user_id: UUID, product_id: UUID) -> None:
        """Delete a product exclusion if present."""

    def add_tag(self, user_id: UUID, tag_id: UUID) -> None:
        """Insert a tag exclusion unless it already exists."""

    def remove_tag(self, user_id: UUID, tag_id: UUID) -> None:
        """Delete a tag exclusion if present."""

    def list_exclusions(self, user_id: UUID) -> UserExclusions:
        """Return excluded products and tags joined with display data."""


@dataclass
class ExclusionService:
    """Application service for exclusion management."""

    repository: ExclusionRepository
    catalog_service: CatalogService

    def add_product_exclusion(self, user_id: UUID, product_id: UUID) -> None:
        """Exclude a product; an existing exclusion is left as is."""
        self.repository.add_product(user_id, product_id)

    def remove_product_exclusion(self, user_id: UUID, product_id: UUID) -> None:
        """Remove a product exclusion if present."""
        self.repository.remove_product(user_id, product_id)

    def add_tag_exclusion(self, user_id: UUID, tag_id: UUID) -> None:
        """Exclude a tag; an existing exclusion is left as is."""
        self.repository.add_tag(user_id, tag_id)

    def remove_tag_exclusion(self, user_id: UUID, tag_id: UUID) -> None:
        """Remove a tag exclusion if present."""
        self.repository.remove_tag(user_id, tag_id)

    def list_exclusions(self, user_id: UUID) -> UserExclusions:
        """Return the user's excluded products and tags."""
        return self.repository.list_exclusions(user_id)

    def toggle_tag_exclusion(self, user_id: UUID, tag_id: UUID) -> bool:
        """Flip a tag's excluded state and return the new state."""
        current = self.repository.list_exclusions(user_id)
        if any(tag.id == tag_id for tag in current.tags):
            self.repository.remove_tag(user_id, tag_id)
            return False
        self.repository.add_tag(user_id, tag_id)
        return True

    async def exclude_catalog_product(
        self, user_id: UUID, product: CatalogProduct
    ) -> UUID:
        """Exclude a search hit, importing it into the catalog first if needed.

        Import and exclusion are separate writes; a failure in between leaves
        the product imported but not excluded.
        """
        product_id = product.id
        if product_id is None:
            if not product.openfoodfacts_code:
                raise ValidationError("External product has no OpenFoodFacts code")
            imported = await self.catalog_service.import_product(
                product.openfoodfacts_code, user_id=user_id
            )
            product_id = imported.product_id
            _logger.info(
                "Imported product before exclusion: code=%s product_id=%s",
                product.openfoodfacts_code,
                product_id,
            )
        self.repository.add_product(user_id, product_id)
        return product_id
