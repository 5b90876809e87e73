"""Dual-curve health scoring for whole and packaged foods."""

import logging
from dataclasses import dataclass, field

from food_scoring.domain.classification import FoodKind, ScoreContext
from food_scoring.domain.nutrients import NutrientProfile
from food_scoring.domain.scoring import ScoreCurve, ScoreResult, ScoringFlags
from food_scoring.services.classifier import classify_food_kind
from food_scoring.services.health_flags import FlagLevel, compute_health_flags
from food_scoring.services.normalizer import round_half_up

WHOLE_FOOD_BASE = 90
WHOLE_FOOD_MIN = 70
WHOLE_FOOD_MAX = 100

PACKAGED_BASE = 60
PACKAGED_MIN = 5
PACKAGED_MAX = 98

LEGACY_BASE = 7.0
LEGACY_CANDY_BASE = 3.0
LEGACY_MIN = 1.0
LEGACY_MAX = 10.0
_LEGACY_FLAG_WEIGHTS = {
    FlagLevel.DANGER: -2.0,
    FlagLevel.WARNING: -1.0,
    FlagLevel.OK: 1.0,
}
_CANDY_HINTS = ("candy", "gum", "gummies", "lollipop")

_logger = logging.getLogger(__name__)


def score_whole_food(nutrients: NutrientProfile) -> int:
    """Score a minimally processed food; healthy unless a nutrient stands out."""
    values = nutrients.with_defaults()
    score = WHOLE_FOOD_BASE
    if values.fiber_g >= 3:
        score += 3
    if values.protein_g >= 10:
        score += 2
    if values.sugar_g <= 8:
        score += 2
    if values.sugar_g > 15:
        score -= 4
    if values.sodium_mg > 400:
        score -= 5
    if values.saturated_fat_g > 5:
        score -= 5
    return _clamp(score, WHOLE_FOOD_MIN, WHOLE_FOOD_MAX)


def score_packaged(nutrients: NutrientProfile) -> int:
    """Score a packaged food with proportional penalties and bonuses."""
    values = nutrients.with_defaults()
    sugar = values.sugar_g
    sodium = values.sodium_mg
    sat_fat = values.saturated_fat_g
    fiber = values.fiber_g
    protein = values.protein_g

    score = float(PACKAGED_BASE)
    if sugar > 10:
        score -= min(15.0, (sugar - 10) * 0.8)
    if sodium > 600:
        score -= min(15.0, (sodium - 600) / 100)
    if sat_fat > 5:
        score -= min(10.0, (sat_fat - 5) * 1.2)
    if fiber >= 3:
        score += min(8.0, fiber * 1.5)
    if protein >= 10:
        score += min(8.0, (protein - 10) * 0.6)
    if sodium > 1000:
        score -= 5
    if sugar > 20:
        score -= 5
    return _clamp(int(round_half_up(score)), PACKAGED_MIN, PACKAGED_MAX)


def score_legacy(ctx: ScoreContext) -> float:
    """Flat rule-based score on a 1-10 scale, independent of classification."""
    name = (ctx.food.name or "").lower()
    categories = " ".join(ctx.food.categories).lower()
    is_candy = any(hint in name or hint in categories for hint in _CANDY_HINTS)
    score = LEGACY_CANDY_BASE if is_candy else LEGACY_BASE
    for flag in compute_health_flags(ctx.food.ingredients, ctx.nutrients):
        score += _LEGACY_FLAG_WEIGHTS.get(flag.level, 0.0)
    return round(max(LEGACY_MIN, min(LEGACY_MAX, score)), 1)


def uses_whole_food_curve(
    kind: FoodKind, ctx: ScoreContext, flags: ScoringFlags
) -> bool:
    """Return whether the whole-food curve applies to a classified item."""
    if kind == FoodKind.WHOLE_FOOD:
        return True
    return (
        kind == FoodKind.AMBIGUOUS
        and bool(ctx.food.generic_slug)
        and ctx.food.source in flags.generic_override_sources
    )


@dataclass
class HealthScoreService:
    """Selects a scoring strategy per item and reports the outcome."""

    flags: ScoringFlags = field(default_factory=ScoringFlags)

    def score(self, ctx: ScoreContext) -> ScoreResult:
        """Classify and score a food item."""
        kind = classify_food_kind(ctx.food)
        if not self.flags.health_score_v2:
            legacy = score_legacy(ctx)
            result = ScoreResult(
                kind=kind,
                curve=ScoreCurve.LEGACY,
                score=round(legacy * 10),
                score_ten=legacy,
            )
        else:
            if uses_whole_food_curve(kind, ctx, self.flags):
                curve = ScoreCurve.WHOLE_FOOD
                value = score_whole_food(ctx.nutrients)
            else:
                curve = ScoreCurve.PACKAGED
                value = score_packaged(ctx.nutrients)
            result = ScoreResult(
                kind=kind, curve=curve, score=value, score_ten=to_ten_scale(value)
            )
        _logger.info(
            "Health score: name=%s kind=%s curve=%s score=%s",
            ctx.food.name,
            result.kind,
            result.curve,
            result.score,
            extra={
                "event": "health_score",
                "source": str(ctx.food.source),
                "generic_slug": ctx.food.generic_slug,
                "nutrients": ctx.nutrients.as_dict(),
                "curve": str(result.curve),
                "score": result.score,
            },
        )
        return result


def score_food_v2(ctx: ScoreContext, flags: ScoringFlags | None = None) -> int:
    """Return a 0-100 health score for a food item."""
    return HealthScoreService(flags or ScoringFlags()).score(ctx).score


def score_food(ctx: ScoreContext, flags: ScoringFlags | None = None) -> float:
    """Return a 0-10 health score for callers using the legacy scale."""
    return HealthScoreService(flags or ScoringFlags()).score(ctx).score_ten


def to_ten_scale(score: int) -> float:
    """Convert a 0-100 score to 0-10 with one decimal."""
    return round(score / 10, 1)


def score_to_stars(score: int) -> float:
    """Convert a 0-100 score to a 0-5 star rating in half steps."""
    return round_half_up(score / 10) / 2


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
