"""Domain models for logged foods."""

from dataclasses import dataclass
from uuid import UUID

from food_scoring.domain.nutrients import NutrientProfile
from food_scoring.domain.scoring import ScoreResult


@dataclass(frozen=True)
class FoodLogEntry:
    """A scored food item persisted to the food log."""

    id: UUID
    name: str
    grams: float
    nutrients: NutrientProfile
    score: ScoreResult
    row: dict[str, object]
