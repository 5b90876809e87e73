"""Models for nutrition enrichment results."""

from enum import StrEnum

from pydantic import BaseModel, Field

from food_scoring.domain.nutrients import NutrientProfile


class EnrichmentSource(StrEnum):
    """Where enriched nutrition data came from."""

    FDC = "FDC"
    EDAMAM = "EDAMAM"
    NUTRITIONIX = "NUTRITIONIX"
    CURATED = "CURATED"
    ESTIMATED = "ESTIMATED"
    GENERIC = "GENERIC"


PAID_SOURCES = frozenset(
    {EnrichmentSource.FDC, EnrichmentSource.EDAMAM, EnrichmentSource.NUTRITIONIX}
)


class Nutrients(BaseModel):
    """Nutrient block as exchanged with enrichment providers."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None
    saturated_fat: float | None = None

    def to_profile(self) -> NutrientProfile:
        """Convert to a domain nutrient profile."""
        return NutrientProfile(
            calories=self.calories,
            protein_g=self.protein,
            carbs_g=self.carbs,
            fat_g=self.fat,
            fiber_g=self.fiber,
            sugar_g=self.sugar,
            sodium_mg=self.sodium,
            saturated_fat_g=self.saturated_fat,
        )

    @classmethod
    def from_profile(cls, profile: NutrientProfile) -> "Nutrients":
        """Build a provider nutrient block from a domain profile."""
        return cls(
            calories=profile.calories or 0.0,
            protein=profile.protein_g or 0.0,
            carbs=profile.carbs_g or 0.0,
            fat=profile.fat_g or 0.0,
            fiber=profile.fiber_g,
            sugar=profile.sugar_g,
            sodium=profile.sodium_mg,
            saturated_fat=profile.saturated_fat_g,
        )


class Ingredient(BaseModel):
    """Single ingredient of an enriched food."""

    name: str
    grams: float | None = None
    amount: str | None = None


class EnrichedFood(BaseModel):
    """Standardized nutrition profile resolved for a food query."""

    name: str
    aliases: list[str] = Field(default_factory=list)
    locale: str = "auto"
    ingredients: list[Ingredient] = Field(default_factory=list)
    per100g: Nutrients
    per_serving: Nutrients | None = None
    serving_grams: float | None = Field(default=None, gt=0)
    source: EnrichmentSource
    source_id: str | None = None
    confidence: float = Field(ge=0.0, le=1.0)


class GenericCandidate(BaseModel):
    """Candidate match from food search that may point at a generic food."""

    name: str
    slug: str | None = None
    is_generic: bool = False
    canonical_key: str | None = None
    class_id: str | None = None
