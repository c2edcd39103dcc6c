"""Domain models for user exclusions."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from uuid import UUID

from nutrition_coach.domain.catalog import Product, Tag


@dataclass(frozen=True)
class UserExclusions:
    """Products and tags a user has opted out of."""

    products: list[Product] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)

    def to_filter(self) -> "ExclusionFilter":
        """Build the id-level filter used for recipe selection."""
        return ExclusionFilter(
            product_ids=frozenset(product.id for product in self.products),
            tag_ids=frozenset(tag.id for tag in self.tags),
        )


@dataclass(frozen=True)
class ExclusionFilter:
    """Two orthogonal exclusion axes checked by set intersection."""

    product_ids: frozenset[UUID] = frozenset()
    tag_ids: frozenset[UUID] = frozenset()

    def allows(
        self, product_ids: Iterable[UUID], tag_ids: Iterable[UUID] = ()
    ) -> bool:
        """Return True when none of the products or tags is excluded."""
        if self.product_ids.intersection(product_ids):
            return False
        return not self.tag_ids.intersection(tag_ids)
