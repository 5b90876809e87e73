"""Food classification domain models."""

from dataclasses import dataclass
from enum import StrEnum

from food_scoring.domain.nutrients import NutrientProfile


class FoodSource(StrEnum):
    """Capture channel a food record came from."""

    BARCODE = "barcode"
    DB = "db"
    PHOTO_ITEM = "photo_item"
    MANUAL = "manual"
    VOICE = "voice"


class FoodKind(StrEnum):
    """Scoring family a food belongs to."""

    WHOLE_FOOD = "whole_food"
    PACKAGED = "packaged"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class FoodClassificationInput:
    """Identification facts about a single food item."""

    source: FoodSource
    name: str = ""
    generic_slug: str | None = None
    brand: str | None = None
    upc: str | None = None
    ingredients: str | None = None
    categories: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoreContext:
    """Everything needed to score one food item."""

    food: FoodClassificationInput
    nutrients: NutrientProfile
