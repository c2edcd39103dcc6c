"""Tests for meal plan generation inputs."""

import asyncio
from uuid import uuid4

import pytest

from nutrition_coach.domain.errors import (
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from nutrition_coach.domain.inventory import InventoryLocation, StockLevel
from nutrition_coach.domain.meal_plans import MealPlanRequest, ShoppingListItem
from nutrition_coach.domain.nutrition import Goal, NutritionTarget
from nutrition_coach.services.exclusions import ExclusionService
from nutrition_coach.services.inventory import InventoryService
from nutrition_coach.services.meal_plans import MealPlanService
from tests.conftest import (
    InMemoryCatalogRepository,
    InMemoryMealPlanRepository,
    InMemoryUserRepository,
    RecordingGenerator,
    make_product,
    make_tag,
)


def test_generation_receives_current_exclusions_and_inventory(  # noqa: PLR0913
    meal_plan_service: MealPlanService,
    exclusion_service: ExclusionService,
    inventory_service: InventoryService,
    user_repository: InMemoryUserRepository,
    catalog_repository: InMemoryCatalogRepository,
    generator: RecordingGenerator,
) -> None:
    user = user_repository.add(goal=Goal.MUSCLE_GAIN, start_weight=75)
    lactose = catalog_repository.add_tag(make_tag("lactose"))
    chicken = catalog_repository.add_product(make_product("Chicken breast"))
    exclusion_service.add_tag_exclusion(user.id, lactose.id)
    inventory_service.add_item(user.id, chicken.id, 300, InventoryLocation.FRIDGE)

    plan_id = asyncio.run(
        meal_plan_service.generate(
            user.id, MealPlanRequest(weeks=4, use_inventory=True)
        )
    )

    assert plan_id == generator.plan_id
    inputs = generator.calls[0]
    assert inputs.target == NutritionTarget(
        calories=3200, protein_g=150, fat_g=75, carbs_g=481
    )
    assert inputs.excluded_tag_ids == frozenset({lactose.id})
    assert inputs.excluded_product_ids == frozenset()
    assert inputs.inventory == [StockLevel(product_id=chicken.id, quantity_grams=300)]


def test_inventory_ignored_unless_requested(
    meal_plan_service: MealPlanService,
    inventory_service: InventoryService,
    user_repository: InMemoryUserRepository,
) -> None:
    user = user_repository.add()
    inventory_service.add_item(user.id, uuid4(), 300)

    inputs = meal_plan_service.build_inputs(user.id, MealPlanRequest(weeks=1))

    assert inputs.inventory == []


@pytest.mark.parametrize("weeks", [0, 5])
def test_weeks_out_of_range_rejected(
    meal_plan_service: MealPlanService,
    user_repository: InMemoryUserRepository,
    weeks: int,
) -> None:
    user = user_repository.add()

    with pytest.raises(ValidationError):
        meal_plan_service.build_inputs(user.id, MealPlanRequest(weeks=weeks))


def test_repeat_days_out_of_range_rejected(
    meal_plan_service: MealPlanService,
    user_repository: InMemoryUserRepository,
) -> None:
    user = user_repository.add()

    with pytest.raises(ValidationError):
        meal_plan_service.build_inputs(
            user.id, MealPlanRequest(weeks=2, allow_repeat_days=8)
        )


def test_unknown_user_raises_not_found(meal_plan_service: MealPlanService) -> None:
    with pytest.raises(NotFoundError):
        meal_plan_service.build_inputs(uuid4(), MealPlanRequest(weeks=1))


def test_user_without_weight_cannot_generate(
    meal_plan_service: MealPlanService,
    user_repository: InMemoryUserRepository,
) -> None:
    user = user_repository.add(start_weight=None)

    with pytest.raises(ValidationError):
        meal_plan_service.build_inputs(user.id, MealPlanRequest(weeks=1))


def test_generate_without_generator_is_unavailable(
    meal_plan_service: MealPlanService,
    user_repository: InMemoryUserRepository,
) -> None:
    user = user_repository.add()
    meal_plan_service.generator = None

    with pytest.raises(ServiceUnavailableError):
        asyncio.run(meal_plan_service.generate(user.id, MealPlanRequest(weeks=1)))


def test_payload_serializes_inputs(
    meal_plan_service: MealPlanService,
    user_repository: InMemoryUserRepository,
) -> None:
    user = user_repository.add(goal=Goal.WEIGHT_LOSS, start_weight=80)

    payload = meal_plan_service.build_inputs(
        user.id, MealPlanRequest(weeks=2, prefer_simple=False)
    ).to_payload()

    assert payload["user_id"] == str(user.id)
    assert payload["weeks"] == 2
    assert payload["prefer_simple"] is False
    assert payload["targets"] == {
        "calories": 2320,
        "protein": 160,
        "fat": 50,
        "carbs": 308,
    }
    assert payload["inventory"] == []


def test_invalid_request_rejected_before_generator_check(
    meal_plan_service: MealPlanService,
    user_repository: InMemoryUserRepository,
) -> None:
    user = user_repository.add()
    meal_plan_service.generator = None

    with pytest.raises(ValidationError):
        asyncio.run(meal_plan_service.generate(user.id, MealPlanRequest(weeks=9)))


def test_unknown_goal_has_no_target(
    meal_plan_service: MealPlanService,
    user_repository: InMemoryUserRepository,
) -> None:
    user = user_repository.add(
        goal="maintenance",  # type: ignore[arg-type]
        start_weight=80,
    )

    with pytest.raises(ValidationError):
        meal_plan_service.build_inputs(user.id, MealPlanRequest(weeks=1))


def _shopping_item(
    name: str, category: str, *, is_monthly: bool, weeks: list[int]
) -> ShoppingListItem:
    return ShoppingListItem(
        id=uuid4(),
        product_id=uuid4(),
        product_name=name,
        category=category,
        unit="г",
        total_grams=500,
        is_monthly=is_monthly,
        week_numbers=weeks,
    )


def test_shopping_list_splits_monthly_and_weekly(
    meal_plan_service: MealPlanService,
    meal_plan_repository: InMemoryMealPlanRepository,
) -> None:
    plan_id = uuid4()
    rice = _shopping_item("Rice", "grains", is_monthly=True, weeks=[1, 2])
    chicken = _shopping_item("Chicken", "poultry", is_monthly=False, weeks=[2, 1])
    kefir = _shopping_item("Kefir", "dairy", is_monthly=False, weeks=[2])
    meal_plan_repository.shopping_items[plan_id] = [chicken, rice, kefir]

    shopping_list = meal_plan_service.get_shopping_list(plan_id)

    assert shopping_list.monthly == [rice]
    assert list(shopping_list.weekly) == [1, 2]
    assert shopping_list.weekly[1] == [chicken]
    assert shopping_list.weekly[2] == [kefir, chicken]


def test_shopping_list_empty_for_unknown_plan(
    meal_plan_service: MealPlanService,
) -> None:
    shopping_list = meal_plan_service.get_shopping_list(uuid4())

    assert shopping_list.monthly == []
    assert shopping_list.weekly == {}
