"""Domain models for products and tags."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class TagType(StrEnum):
    """Grouping used to present tags; exclusion ignores it."""

    ALLERGEN = "allergen"
    DIET = "diet"
    PREFERENCE = "preference"


def parse_tag_type(value: object) -> TagType | str:
    """Return the known tag type, or the stored string for any other grouping."""
    raw = str(value or "")
    try:
        return TagType(raw)
    except ValueError:
        return raw


class ProductSource(StrEnum):
    """Where a product search hit came from."""

    LOCAL = "local"
    OPENFOODFACTS = "openfoodfacts"


@dataclass(frozen=True)
class Product:
    """A product stored in the local catalog, nutrients per 100 g."""

    id: UUID
    name: str
    brand: str | None
    calories: float
    protein: float
    fat: float
    carbs: float
    fiber: float
    category: str
    unit: str
    openfoodfacts_code: str | None = None


@dataclass(frozen=True)
class Tag:
    """Represents an allergen, diet or preference tag."""

    id: UUID
    name: str
    name_ru: str
    type: TagType | str
    description: str | None = None


@dataclass(frozen=True)
class CatalogProduct:
    """A product search hit, local or external."""

    name: str
    brand: str | None
    calories: float
    protein: float
    fat: float
    carbs: float
    fiber: float
    category: str
    source: ProductSource
    id: UUID | None = None
    openfoodfacts_code: str | None = None

    @property
    def is_local(self) -> bool:
        """Return True when the hit already has a local product id."""
        return self.id is not None

    @classmethod
    def from_product(cls, product: Product) -> "CatalogProduct":
        """Wrap a local product as a search hit."""
        return cls(
            id=product.id,
            name=product.name,
            brand=product.brand,
            calories=product.calories,
            protein=product.protein,
            fat=product.fat,
            carbs=product.carbs,
            fiber=product.fiber,
            category=product.category,
            source=ProductSource.LOCAL,
            openfoodfacts_code=product.openfoodfacts_code,
        )


@dataclass(frozen=True)
class ImportResult:
    """Outcome of importing an external product."""

    product_id: UUID
    already_exists: bool


_CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("poultry", ("poultry", "chicken", "курица")),
    ("meat", ("meat", "beef", "pork", "мясо")),
    ("fish", ("fish", "рыба", "seafood")),
    ("dairy", ("dairy", "milk", "молоко", "молочн")),
    ("eggs", ("egg", "яйц")),
    ("grains", ("grain", "cereal", "круп")),
    ("pasta", ("pasta", "макарон")),
    ("bread", ("bread", "хлеб")),
    ("fruits", ("fruit", "фрукт")),
    ("vegetables", ("vegetable", "овощ")),
    ("nuts", ("nut", "орех")),
    ("oils", ("oil", "масло")),
    ("beverages", ("beverage", "напиток")),
)


def detect_category(category_tags: list[str]) -> str:
    """Map OpenFoodFacts category tags onto a local product category."""
    haystack = " ".join(category_tags).lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(keyword in haystack for keyword in keywords):
            return category
    return "other"
