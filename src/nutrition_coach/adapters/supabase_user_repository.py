"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrition_coach.domain.models import UserProfile
from nutrition_coach.domain.nutrition import parse_goal
from nutrition_coach.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user profile reads."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's goal and start weight."""
        response = (
            self.client.table("users")
            .select("id, telegram_id, goal, start_weight")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        start_weight = row.get("start_weight")
        return UserProfile(
            id=UUID(row["id"]),
            telegram_id=int(row["telegram_id"]),
            goal=parse_goal(row.get("goal")),
            start_weight=float(start_weight) if start_weight is not None else None,
        )
