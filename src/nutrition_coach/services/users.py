"""User profile lookups and nutrition targets."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_coach.domain.models import UserProfile
from nutrition_coach.domain.nutrition import NutritionTarget, calculate_kbju


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile, if present."""


@dataclass
class UserService:
    """Application service for user profile reads."""

    repository: UserRepository

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user id."""
        return self.repository.get_profile(user_id)

    def get_targets(self, user_id: UUID) -> NutritionTarget | None:
        """Compute targets from the stored start weight and goal."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            return None
        return calculate_kbju(profile.start_weight, profile.goal)
