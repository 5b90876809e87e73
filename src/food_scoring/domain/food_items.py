"""Domain models for loggable food items."""

from dataclasses import dataclass, field

from food_scoring.domain.classification import FoodClassificationInput, FoodSource
from food_scoring.domain.nutrients import NormalizedNutrients


@dataclass(frozen=True)
class LoggableFoodItem:
    """Food item ready to be confirmed, scored and logged."""

    id: str
    name: str
    grams: float
    nutrients: NormalizedNutrients
    source: FoodSource
    upc: str | None = None
    brand: str | None = None
    generic_slug: str | None = None
    ingredients: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    additives: list[str] = field(default_factory=list)
    allergens: list[str] = field(default_factory=list)
    confidence: float | None = None

    def classification_input(self) -> FoodClassificationInput:
        """Return the identification facts used by the classifier."""
        return FoodClassificationInput(
            source=self.source,
            name=self.name,
            generic_slug=self.generic_slug,
            brand=self.brand,
            upc=self.upc,
            ingredients=", ".join(self.ingredients) or None,
            categories=tuple(self.categories),
        )
