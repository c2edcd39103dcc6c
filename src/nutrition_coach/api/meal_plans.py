"""Meal plan endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request

from nutrition_coach.api.schemas import (
    GenerateMealPlanBody,
    envelope,
    serialize_meal_plan,
    serialize_shopping_list,
)
from nutrition_coach.domain.errors import NotFoundError
from nutrition_coach.domain.meal_plans import MealPlanRequest

if TYPE_CHECKING:
    from nutrition_coach.containers import AppContainer

router = APIRouter(prefix="/api/mealplan", tags=["mealplan"])


@router.post("/{user_id}/generate")
async def generate_meal_plan(
    user_id: UUID, body: GenerateMealPlanBody, request: Request
) -> dict[str, object]:
    """Start generation with the user's current exclusions and inventory."""
    container: AppContainer = request.app.state.container
    meal_plan_id = await container.meal_plan_service.generate(
        user_id,
        MealPlanRequest(
            weeks=body.weeks,
            allow_repeat_days=body.allow_repeat_days,
            prefer_simple=body.prefer_simple,
            use_inventory=body.use_inventory,
        ),
    )
    return envelope({"meal_plan_id": str(meal_plan_id)})


@router.get("/plans/{meal_plan_id}")
async def get_meal_plan(meal_plan_id: UUID, request: Request) -> dict[str, object]:
    """Return a generated plan with its days and meals."""
    container: AppContainer = request.app.state.container
    plan = container.meal_plan_service.get_plan(meal_plan_id)
    if plan is None:
        raise NotFoundError("Meal plan not found")
    return envelope(serialize_meal_plan(plan))


@router.get("/plans/{meal_plan_id}/shopping-list")
async def get_shopping_list(meal_plan_id: UUID, request: Request) -> dict[str, object]:
    """Return the plan's shopping list split into monthly and weekly purchases."""
    container: AppContainer = request.app.state.container
    shopping_list = container.meal_plan_service.get_shopping_list(meal_plan_id)
    return envelope(serialize_shopping_list(shopping_list))
