"""Supabase implementation for food log persistence."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_scoring.services.food_log import FoodLogRepository


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase-backed repository for food log rows."""

    client: Client
    table_name: str = "nutrition_logs"

    def create_food_log(self, user_id: UUID, row: dict[str, object]) -> UUID:
        """Insert a food log row and return its id."""
        response = (
            self.client.table(self.table_name)
            .insert({"user_id": str(user_id), **row})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food log entry")
        return UUID(response.data[0]["id"])
