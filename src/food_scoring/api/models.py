"""Pydantic request models for the scoring API."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from food_scoring.domain.classification import FoodClassificationInput, FoodSource
from food_scoring.domain.enrichment import GenericCandidate
from food_scoring.domain.nutrients import NutrientProfile


class FoodPayload(BaseModel):
    """Identification facts for a food item."""

    source: FoodSource = FoodSource.MANUAL
    name: str = ""
    generic_slug: str | None = None
    brand: str | None = None
    upc: str | None = None
    ingredients: str | None = None
    categories: list[str] = Field(default_factory=list)

    def to_domain(self) -> FoodClassificationInput:
        """Convert to the classifier input."""
        return FoodClassificationInput(
            source=self.source,
            name=self.name,
            generic_slug=self.generic_slug,
            brand=self.brand,
            upc=self.upc,
            ingredients=self.ingredients,
            categories=tuple(self.categories),
        )


class NutrientPayload(BaseModel):
    """Nutrient values for the portion being scored."""

    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    fiber_g: float | None = None
    sugar_g: float | None = None
    sodium_mg: float | None = None
    saturated_fat_g: float | None = None

    def to_domain(self) -> NutrientProfile:
        """Convert to a domain nutrient profile."""
        return NutrientProfile(**self.model_dump())


class ScoreRequest(BaseModel):
    """Request body for scoring a single food."""

    food: FoodPayload
    nutrients: NutrientPayload = Field(default_factory=NutrientPayload)


class EnrichRequest(BaseModel):
    """Request body for enriching a food query."""

    query: str = Field(min_length=1)
    candidate: GenericCandidate | None = None
    grams: float | None = Field(default=None, gt=0)


class FoodLogRequest(BaseModel):
    """Request body for logging a captured food item."""

    user_id: UUID
    item: dict[str, Any]


class BarcodeLogRequest(BaseModel):
    """Request body for logging an Open Food Facts product by barcode."""

    user_id: UUID
    barcode: str = Field(min_length=1)
    product: dict[str, Any]
    grams: float | None = Field(default=None, gt=0)
