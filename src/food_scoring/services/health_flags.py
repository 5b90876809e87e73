"""Ingredient and nutrient health flags."""

import re
from dataclasses import dataclass
from enum import StrEnum

from food_scoring.domain.nutrients import NutrientProfile

HIGH_SUGAR_G = 18
DANGER_SUGAR_G = 25
HIGH_SODIUM_MG = 800
DANGER_SODIUM_MG = 1200
LOW_SODIUM_MG = 140
WHOLE_GRAIN_MAX_SUGAR_G = 10

_ARTIFICIAL_COLORS = re.compile(
    r"(red\s?40|allura\s?red|yellow\s?5|tartrazine|yellow\s?6|sunset\s?yellow"
    r"|blue\s?1|blue\s?2|green\s?3)",
    re.IGNORECASE,
)
_PRESERVATIVES = re.compile(
    r"(\bbha\b|\bbht\b|tbhq|sodium\s+benzoate|potassium\s+sorbate)", re.IGNORECASE
)
_SWEETENERS = re.compile(
    r"(aspartame|acesulfame\s*k|sucralose|saccharin)", re.IGNORECASE
)


class FlagLevel(StrEnum):
    """Severity of a health flag."""

    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"
    OK = "ok"


@dataclass(frozen=True)
class HealthFlag:
    """Single health observation about a food."""

    id: str
    level: FlagLevel
    label: str
    details: str | None = None


def compute_health_flags(
    ingredients_text: str | None, nutrients: NutrientProfile
) -> list[HealthFlag]:
    """Return health flags derived from ingredient text and per-serving nutrients."""
    flags: list[HealthFlag] = []
    text = (ingredients_text or "").lower()
    sugar = nutrients.sugar_g
    sodium = nutrients.sodium_mg

    if sugar and sugar >= HIGH_SUGAR_G:
        flags.append(
            HealthFlag(
                id="high_sugar",
                level=(
                    FlagLevel.DANGER if sugar >= DANGER_SUGAR_G else FlagLevel.WARNING
                ),
                label="High Sugar",
                details=f"{sugar:g}g sugar per serving",
            )
        )
    if _ARTIFICIAL_COLORS.search(text):
        flags.append(
            HealthFlag(
                id="artificial_colors",
                level=FlagLevel.WARNING,
                label="Artificial Colors",
                details="Contains Red 40, Yellow 5/6, Blue 1 or similar dyes",
            )
        )
    if _PRESERVATIVES.search(text):
        flags.append(
            HealthFlag(
                id="preservatives",
                level=FlagLevel.WARNING,
                label="Preservatives of Concern",
                details="Contains BHA, BHT, TBHQ, or other concerning preservatives",
            )
        )
    if _SWEETENERS.search(text):
        flags.append(
            HealthFlag(
                id="artificial_sweeteners",
                level=FlagLevel.WARNING,
                label="Artificial Sweeteners",
                details="Contains aspartame, sucralose, or other artificial sweeteners",
            )
        )
    if sodium and sodium > HIGH_SODIUM_MG:
        flags.append(
            HealthFlag(
                id="high_sodium",
                level=(
                    FlagLevel.DANGER if sodium > DANGER_SODIUM_MG else FlagLevel.WARNING
                ),
                label="High Sodium",
                details=f"{sodium:g}mg sodium per serving",
            )
        )
    if "whole grain" in text and (not sugar or sugar < WHOLE_GRAIN_MAX_SUGAR_G):
        flags.append(
            HealthFlag(
                id="whole_grains",
                level=FlagLevel.OK,
                label="Whole Grains",
                details="Contains whole grain ingredients",
            )
        )
    if sodium and sodium < LOW_SODIUM_MG:
        flags.append(
            HealthFlag(
                id="low_sodium",
                level=FlagLevel.OK,
                label="Low Sodium",
                details="Low in sodium",
            )
        )
    return flags
