"""Domain models for the nutrition coach."""

from dataclasses import dataclass
from uuid import UUID

from nutrition_coach.domain.nutrition import Goal


@dataclass(frozen=True)
class UserProfile:
    """Course participant fields the nutrition section reads."""

    id: UUID
    telegram_id: int
    goal: Goal | None
    start_weight: float | None
