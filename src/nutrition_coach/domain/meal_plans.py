"""Domain models for generated meal plans."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID

from nutrition_coach.domain.inventory import StockLevel
from nutrition_coach.domain.nutrition import NutritionTarget

MIN_WEEKS = 1
MAX_WEEKS = 4


class MealType(StrEnum):
    """Meal slot within a day, in serving order."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


MEAL_ORDER: dict[MealType, int] = {meal: index for index, meal in enumerate(MealType)}


@dataclass(frozen=True)
class RecipeIngredient:
    product_id: UUID
    product_name: str
    amount_grams: float
    is_optional: bool = False


@dataclass(frozen=True)
class RecipeSummary:
    id: UUID
    name: str
    cooking_time: int | None
    instructions: str | None
    ingredients: list[RecipeIngredient] = field(default_factory=list)


@dataclass(frozen=True)
class Meal:
    """A single meal slot with its nutrient totals."""

    id: UUID
    meal_type: MealType
    calories: float
    protein: float
    fat: float
    carbs: float
    recipe: RecipeSummary | None = None


@dataclass(frozen=True)
class MealDay:
    """One day of a plan with meals in serving order."""

    id: UUID
    week_number: int
    day_number: int
    total_calories: float
    total_protein: float
    total_fat: float
    total_carbs: float
    meals: list[Meal] = field(default_factory=list)


@dataclass(frozen=True)
class MealPlan:
    """A generated plan with its targets and days."""

    id: UUID
    user_id: UUID
    weeks: int
    target_calories: int
    target_protein: int
    target_fat: int
    target_carbs: int
    days: list[MealDay] = field(default_factory=list)


@dataclass(frozen=True)
class ShoppingListItem:
    """Aggregated purchase for one product across a plan."""

    id: UUID
    product_id: UUID
    product_name: str
    category: str
    unit: str
    total_grams: float
    is_monthly: bool
    week_numbers: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class ShoppingList:
    """Non-perishables bought once, perishables grouped by plan week."""

    meal_plan_id: UUID
    monthly: list[ShoppingListItem] = field(default_factory=list)
    weekly: dict[int, list[ShoppingListItem]] = field(default_factory=dict)


@dataclass(frozen=True)
class MealPlanRequest:
    """Options for a generation run."""

    weeks: int
    allow_repeat_days: int = 3
    prefer_simple: bool = True
    use_inventory: bool = False


@dataclass(frozen=True)
class GenerationInputs:
    """Everything the external generator consumes for one user."""

    user_id: UUID
    request: MealPlanRequest
    target: NutritionTarget
    excluded_product_ids: frozenset[UUID]
    excluded_tag_ids: frozenset[UUID]
    inventory: list[StockLevel] = field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        """Serialize for the generator's JSON API."""
        return {
            "user_id": str(self.user_id),
            "weeks": self.request.weeks,
            "allow_repeat_days": self.request.allow_repeat_days,
            "prefer_simple": self.request.prefer_simple,
            "use_inventory": self.request.use_inventory,
            "targets": {
                "calories": self.target.calories,
                "protein": self.target.protein_g,
                "fat": self.target.fat_g,
                "carbs": self.target.carbs_g,
            },
            "excluded_product_ids": sorted(str(i) for i in self.excluded_product_ids),
            "excluded_tag_ids": sorted(str(i) for i in self.excluded_tag_ids),
            "inventory": [
                {
                    "product_id": str(level.product_id),
                    "quantity_grams": level.quantity_grams,
                }
                for level in self.inventory
            ],
        }
