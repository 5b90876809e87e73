"""Food log service that scores items and persists them."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from food_scoring.domain.classification import ScoreContext
from food_scoring.domain.food_items import LoggableFoodItem
from food_scoring.domain.food_log import FoodLogEntry
from food_scoring.domain.nutrients import NutrientProfile
from food_scoring.domain.scoring import ScoreResult
from food_scoring.services.normalizer import scale_to_portion
from food_scoring.services.scoring import HealthScoreService


class FoodLogRepository(Protocol):
    """Persistence interface for food log rows."""

    def create_food_log(self, user_id: UUID, row: dict[str, object]) -> UUID:
        """Insert a food log row and return its id."""


@dataclass
class FoodLogService:
    """Scores confirmed food items and writes them to the food log."""

    scoring: HealthScoreService
    repository: FoodLogRepository
    save_split: bool = False

    def preview(self, item: LoggableFoodItem) -> tuple[NutrientProfile, ScoreResult]:
        """Return portion nutrients and the score without persisting."""
        portion = scale_to_portion(item.nutrients.per_gram, item.grams)
        result = self.scoring.score(
            ScoreContext(food=item.classification_input(), nutrients=portion)
        )
        return portion, result

    def log_item(self, user_id: UUID, item: LoggableFoodItem) -> FoodLogEntry:
        """Score an item at its portion size and persist it."""
        portion, result = self.preview(item)
        row = self.build_row(item, portion, result, logged_at=datetime.now(tz=UTC))
        entry_id = self.repository.create_food_log(user_id, row)
        return FoodLogEntry(
            id=entry_id,
            name=item.name,
            grams=item.grams,
            nutrients=portion,
            score=result,
            row=row,
        )

    def build_row(
        self,
        item: LoggableFoodItem,
        portion: NutrientProfile,
        result: ScoreResult,
        logged_at: datetime,
    ) -> dict[str, object]:
        """Build a row in the legacy or split persistence schema."""
        values = portion.with_defaults()
        row: dict[str, object] = {
            "food_name": item.name,
            "grams": item.grams,
            "calories": values.calories,
            "protein": values.protein_g,
            "carbs": values.carbs_g,
            "fat": values.fat_g,
            "fiber": values.fiber_g,
            "sugar": values.sugar_g,
            "sodium": values.sodium_mg,
            "source": str(item.source),
            "logged_at": logged_at.isoformat(),
        }
        if not self.save_split:
            row["health_score"] = result.score_ten
            return row

        row["saturated_fat"] = values.saturated_fat_g
        row["health_score_v2"] = result.score
        row["food_kind"] = str(result.kind)
        row["score_curve"] = str(result.curve)
        row["nutrition_json"] = {
            "basis": str(item.nutrients.basis),
            "serving_grams": item.nutrients.serving_grams,
            "per_gram": item.nutrients.per_gram.as_dict(),
            "upc": item.upc,
            "generic_slug": item.generic_slug,
            "ingredients": item.ingredients,
            "additives": item.additives,
            "allergens": item.allergens,
            "confidence": item.confidence,
        }
        return row
