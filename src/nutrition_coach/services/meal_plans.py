"""Meal plan generation requests and plan reads."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_coach.domain.errors import (
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from nutrition_coach.domain.meal_plans import (
    MAX_WEEKS,
    MIN_WEEKS,
    GenerationInputs,
    MealPlan,
    MealPlanRequest,
    ShoppingList,
    ShoppingListItem,
)
from nutrition_coach.services.exclusions import ExclusionService
from nutrition_coach.services.inventory import InventoryService
from nutrition_coach.services.users import UserService

_logger = logging.getLogger(__name__)

_MAX_REPEAT_DAYS = 7


class MealPlanGenerator(Protocol):
    """External process that turns inputs into a stored plan."""

    async def generate(self, inputs: GenerationInputs) -> UUID:
        """Generate and persist a plan, returning its id."""


class MealPlanRepository(Protocol):
    """Read access to generated plans."""

    def get_plan(self, meal_plan_id: UUID) -> MealPlan | None:
        """Return a plan with its days and meals, if present."""

    def list_shopping_items(self, meal_plan_id: UUID) -> list[ShoppingListItem]:
        """Return shopping list rows ordered by product category then name."""


@dataclass
class MealPlanService:
    """Assembles generator inputs and reads generated plans."""

    user_service: UserService
    exclusion_service: ExclusionService
    inventory_service: InventoryService
    repository: MealPlanRepository
    generator: MealPlanGenerator | None = None

    def build_inputs(self, user_id: UUID, request: MealPlanRequest) -> GenerationInputs:
        """Collect targets, exclusions and optionally inventory for a user."""
        _validate_request(request)
        profile = self.user_service.get_profile(user_id)
        if profile is None:
            raise NotFoundError("User not found")
        target = self.user_service.get_targets(user_id)
        if target is None:
            raise ValidationError("Start weight and goal are required to build a plan")

        exclusion_filter = self.exclusion_service.list_exclusions(user_id).to_filter()
        inventory = (
            self.inventory_service.snapshot(user_id) if request.use_inventory else []
        )
        return GenerationInputs(
            user_id=user_id,
            request=request,
            target=target,
            excluded_product_ids=exclusion_filter.product_ids,
            excluded_tag_ids=exclusion_filter.tag_ids,
            inventory=inventory,
        )

    async def generate(self, user_id: UUID, request: MealPlanRequest) -> UUID:
        """Hand the user's inputs to the generator and return the new plan id."""
        _validate_request(request)
        if self.generator is None:
            raise ServiceUnavailableError("Meal plan generation is not available")
        inputs = self.build_inputs(user_id, request)
        _logger.info(
            "Generating meal plan: user_id=%s weeks=%s inventory_items=%s",
            user_id,
            request.weeks,
            len(inputs.inventory),
        )
        return await self.generator.generate(inputs)

    def get_plan(self, meal_plan_id: UUID) -> MealPlan | None:
        """Return a stored plan."""
        return self.repository.get_plan(meal_plan_id)

    def get_shopping_list(self, meal_plan_id: UUID) -> ShoppingList:
        """Split a plan's shopping list into monthly and per-week purchases.

        Perishable items appear under every week they are used in.
        """
        monthly: list[ShoppingListItem] = []
        weekly: dict[int, list[ShoppingListItem]] = {}
        for item in self.repository.list_shopping_items(meal_plan_id):
            if item.is_monthly:
                monthly.append(item)
                continue
            for week_number in item.week_numbers:
                weekly.setdefault(week_number, []).append(item)
        return ShoppingList(
            meal_plan_id=meal_plan_id,
            monthly=monthly,
            weekly=dict(sorted(weekly.items())),
        )


def _validate_request(request: MealPlanRequest) -> None:
    if not MIN_WEEKS <= request.weeks <= MAX_WEEKS:
        raise ValidationError(f"weeks must be between {MIN_WEEKS} and {MAX_WEEKS}")
    if not 0 <= request.allow_repeat_days <= _MAX_REPEAT_DAYS:
        raise ValidationError(
            f"allowRepeatDays must be between 0 and {_MAX_REPEAT_DAYS}"
        )
