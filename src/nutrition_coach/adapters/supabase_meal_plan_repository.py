"""Supabase read access to generated meal plans."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrition_coach.domain.meal_plans import (
    MEAL_ORDER,
    Meal,
    MealDay,
    MealPlan,
    MealType,
    RecipeIngredient,
    RecipeSummary,
    ShoppingListItem,
)
from nutrition_coach.services.meal_plans import MealPlanRepository

_DAY_COLUMNS = (
    "id, week_number, day_number, total_calories, total_protein, total_fat, "
    "total_carbs, meals(id, meal_type, calories, protein, fat, carbs, "
    "recipes(id, name, cooking_time, instructions, "
    "recipe_items(product_id, amount_grams, is_optional, products(name))))"
)


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Reads meal_plans with nested meal_days, meals and recipes."""

    client: Client

    def get_plan(self, meal_plan_id: UUID) -> MealPlan | None:
        """Return a plan with days by week/day and meals in serving order."""
        plan_response = (
            self.client.table("meal_plans")
            .select(
                "id, user_id, weeks, target_calories, target_protein, "
                "target_fat, target_carbs"
            )
            .eq("id", str(meal_plan_id))
            .limit(1)
            .execute()
        )
        if not plan_response.data:
            return None
        plan = plan_response.data[0]

        days_response = (
            self.client.table("meal_days")
            .select(_DAY_COLUMNS)
            .eq("meal_plan_id", str(meal_plan_id))
            .order("week_number")
            .order("day_number")
            .execute()
        )
        days = sorted(
            (_parse_day(row) for row in days_response.data or []),
            key=lambda day: (day.week_number, day.day_number),
        )
        return MealPlan(
            id=UUID(str(plan["id"])),
            user_id=UUID(str(plan["user_id"])),
            weeks=int(plan.get("weeks") or 0),
            target_calories=int(plan.get("target_calories") or 0),
            target_protein=int(plan.get("target_protein") or 0),
            target_fat=int(plan.get("target_fat") or 0),
            target_carbs=int(plan.get("target_carbs") or 0),
            days=days,
        )

    def list_shopping_items(self, meal_plan_id: UUID) -> list[ShoppingListItem]:
        """Return shopping list rows joined to products, by category then name."""
        response = (
            self.client.table("shopping_list_items")
            .select(
                "id, product_id, total_grams, is_monthly, week_numbers, "
                "products(name, category, unit)"
            )
            .eq("meal_plan_id", str(meal_plan_id))
            .execute()
        )
        items = [_parse_shopping_item(row) for row in response.data or []]
        return sorted(items, key=lambda item: (item.category, item.product_name))


def _parse_day(row: dict[str, object]) -> MealDay:
    meals = sorted(
        (_parse_meal(meal) for meal in row.get("meals") or []),
        key=lambda meal: MEAL_ORDER[meal.meal_type],
    )
    return MealDay(
        id=UUID(str(row["id"])),
        week_number=int(row["week_number"]),
        day_number=int(row["day_number"]),
        total_calories=float(row.get("total_calories") or 0.0),
        total_protein=float(row.get("total_protein") or 0.0),
        total_fat=float(row.get("total_fat") or 0.0),
        total_carbs=float(row.get("total_carbs") or 0.0),
        meals=meals,
    )


def _parse_meal(row: dict[str, object]) -> Meal:
    recipe = row.get("recipes")
    return Meal(
        id=UUID(str(row["id"])),
        meal_type=MealType(row["meal_type"]),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        fat=float(row.get("fat") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        recipe=_parse_recipe(recipe) if isinstance(recipe, dict) else None,
    )


def _parse_recipe(row: dict[str, object]) -> RecipeSummary:
    ingredients = []
    for item in row.get("recipe_items") or []:
        product = item.get("products") or {}
        ingredients.append(
            RecipeIngredient(
                product_id=UUID(str(item["product_id"])),
                product_name=str(product.get("name", "")),
                amount_grams=float(item.get("amount_grams") or 0.0),
                is_optional=bool(item.get("is_optional", False)),
            )
        )
    cooking_time = row.get("cooking_time")
    return RecipeSummary(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        cooking_time=int(cooking_time) if cooking_time is not None else None,
        instructions=row.get("instructions"),
        ingredients=ingredients,
    )


def _parse_shopping_item(row: dict[str, object]) -> ShoppingListItem:
    product = row.get("products") or {}
    return ShoppingListItem(
        id=UUID(str(row["id"])),
        product_id=UUID(str(row["product_id"])),
        product_name=str(product.get("name", "")),
        category=str(product.get("category") or "other"),
        unit=str(product.get("unit") or "г"),
        total_grams=float(row.get("total_grams") or 0.0),
        is_monthly=bool(row.get("is_monthly", False)),
        week_numbers=sorted(int(week) for week in row.get("week_numbers") or []),
    )
