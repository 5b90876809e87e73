"""Scoring domain models."""

from dataclasses import dataclass, field
from enum import StrEnum

from food_scoring.domain.classification import FoodKind, FoodSource


class ScoreCurve(StrEnum):
    """Scoring strategy used to produce a score."""

    WHOLE_FOOD = "whole_food"
    PACKAGED = "packaged"
    LEGACY = "legacy"


@dataclass(frozen=True)
class ScoringFlags:
    """Runtime toggles that select the scoring strategy."""

    health_score_v2: bool = True
    generic_override_sources: frozenset[FoodSource] = field(
        default_factory=lambda: frozenset({FoodSource.PHOTO_ITEM})
    )


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of scoring a single food item."""

    kind: FoodKind
    curve: ScoreCurve
    score: int
    score_ten: float
