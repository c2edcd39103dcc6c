"""HTTP client for the external meal plan generator."""

from dataclasses import dataclass
from uuid import UUID

import httpx

from nutrition_coach.domain.meal_plans import GenerationInputs
from nutrition_coach.services.meal_plans import MealPlanGenerator


@dataclass
class HttpxMealPlanGeneratorClient(MealPlanGenerator):
    """Posts generation inputs to the generator service."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 120

    @classmethod
    def create(cls, url: str) -> "HttpxMealPlanGeneratorClient":
        """Create a generator client with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient())

    async def generate(self, inputs: GenerationInputs) -> UUID:
        """Request a plan and return the id the generator stored it under."""
        response = await self.http_client.post(
            self.url, json=inputs.to_payload(), timeout=self.timeout_seconds
        )
        response.raise_for_status()
        body = response.json()
        meal_plan_id = body.get("meal_plan_id")
        if not meal_plan_id:
            raise RuntimeError("Meal plan generator returned no plan id")
        return UUID(str(meal_plan_id))

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
