"""Nutrient domain models."""

from dataclasses import dataclass, fields
from enum import StrEnum


class NutrientBasis(StrEnum):
    """Unit basis that nutrient values are expressed in."""

    PER_100G = "per100g"
    PER_SERVING = "perServing"
    PER_GRAM = "perGram"


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrient values for a food; ``None`` means the value is unknown."""

    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    fiber_g: float | None = None
    sugar_g: float | None = None
    sodium_mg: float | None = None
    saturated_fat_g: float | None = None

    def with_defaults(self) -> "NutrientProfile":
        """Return a copy where every unknown value is replaced by zero."""
        return NutrientProfile(
            **{
                item.name: float(getattr(self, item.name) or 0.0)
                for item in fields(self)
            }
        )

    def scaled(self, factor: float) -> "NutrientProfile":
        """Return a copy with every known value multiplied by ``factor``."""
        return NutrientProfile(
            **{
                item.name: (
                    None
                    if getattr(self, item.name) is None
                    else getattr(self, item.name) * factor
                )
                for item in fields(self)
            }
        )

    def as_dict(self) -> dict[str, float | None]:
        """Return nutrient values keyed by field name."""
        return {item.name: getattr(self, item.name) for item in fields(self)}


@dataclass(frozen=True)
class NormalizedNutrients:
    """Per-gram nutrients together with the basis they were derived from."""

    basis: NutrientBasis
    per_gram: NutrientProfile
    serving_grams: float | None = None
