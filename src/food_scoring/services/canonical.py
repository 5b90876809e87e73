"""Static nutrition tables for canonical, generic and whole-food lookups."""

import re
from dataclasses import dataclass, field
from enum import StrEnum

from food_scoring.domain.nutrients import NutrientProfile


class CanonicalKey(StrEnum):
    """Identifiers of canonical generic foods."""

    HOT_DOG = "generic_hot_dog"
    PIZZA_SLICE = "generic_pizza_slice"
    TERIYAKI_CHICKEN_BOWL = "generic_teriyaki_chicken_bowl"
    CALIFORNIA_ROLL = "generic_california_roll"
    WHITE_RICE_COOKED = "generic_white_rice_cooked"
    EGG_LARGE = "generic_egg_large"
    OATMEAL_DRY = "generic_oatmeal_dry"
    CHICKEN_BREAST = "generic_chicken_breast"
    BANANA = "generic_banana"
    APPLE = "generic_apple"


@dataclass(frozen=True)
class CanonicalFood:
    """Canonical per-gram nutrition with its typical ingredients."""

    per_gram: NutrientProfile
    ingredients: tuple[str, ...] = ()


@dataclass(frozen=True)
class GenericFood:
    """Curated generic food with per-100g nutrition."""

    name: str
    per100g: NutrientProfile
    serving_grams: float
    canonical_key: CanonicalKey | None = None
    aliases: tuple[str, ...] = field(default_factory=tuple)


CANONICAL_FOODS: dict[CanonicalKey, CanonicalFood] = {
    CanonicalKey.HOT_DOG: CanonicalFood(
        NutrientProfile(2.9, 0.10, 0.02, 0.26, 0.0, 0.01, 10.9, 0.1),
        ("beef", "pork", "water", "salt", "corn syrup", "sodium nitrite"),
    ),
    CanonicalKey.PIZZA_SLICE: CanonicalFood(
        NutrientProfile(2.66, 0.11, 0.33, 0.10, 0.023, 0.036, 5.98, 0.045),
        ("wheat flour", "tomato sauce", "mozzarella cheese", "olive oil", "yeast"),
    ),
    CanonicalKey.TERIYAKI_CHICKEN_BOWL: CanonicalFood(
        NutrientProfile(1.63, 0.12, 0.21, 0.04, 0.008, 0.05, 4.1, 0.01),
        ("white rice", "chicken", "teriyaki sauce", "broccoli"),
    ),
    CanonicalKey.CALIFORNIA_ROLL: CanonicalFood(
        NutrientProfile(1.29, 0.04, 0.18, 0.06, 0.012, 0.03, 2.8, 0.009),
        ("sushi rice", "imitation crab", "avocado", "cucumber", "nori"),
    ),
    CanonicalKey.WHITE_RICE_COOKED: CanonicalFood(
        NutrientProfile(1.30, 0.027, 0.28, 0.003, 0.004, 0.001, 0.01, 0.001),
        ("white rice", "water"),
    ),
    CanonicalKey.EGG_LARGE: CanonicalFood(
        NutrientProfile(1.55, 0.13, 0.011, 0.11, 0.0, 0.011, 1.24, 0.033),
        ("egg",),
    ),
    CanonicalKey.OATMEAL_DRY: CanonicalFood(
        NutrientProfile(3.79, 0.13, 0.68, 0.065, 0.10, 0.01, 0.06, 0.011),
        ("rolled oats",),
    ),
    CanonicalKey.CHICKEN_BREAST: CanonicalFood(
        NutrientProfile(1.65, 0.31, 0.0, 0.036, 0.0, 0.0, 0.74, 0.01),
        ("chicken breast",),
    ),
    CanonicalKey.BANANA: CanonicalFood(
        NutrientProfile(0.89, 0.011, 0.228, 0.003, 0.026, 0.122, 0.01, 0.001),
        ("banana",),
    ),
    CanonicalKey.APPLE: CanonicalFood(
        NutrientProfile(0.52, 0.003, 0.14, 0.002, 0.024, 0.104, 0.01, 0.0),
        ("apple",),
    ),
}

CANONICAL_BY_CORE_NOUN: dict[str, CanonicalKey] = {
    "hot_dog": CanonicalKey.HOT_DOG,
    "hotdog": CanonicalKey.HOT_DOG,
    "pizza": CanonicalKey.PIZZA_SLICE,
    "teriyaki_bowl": CanonicalKey.TERIYAKI_CHICKEN_BOWL,
    "california_roll": CanonicalKey.CALIFORNIA_ROLL,
    "rice_cooked": CanonicalKey.WHITE_RICE_COOKED,
    "rice": CanonicalKey.WHITE_RICE_COOKED,
    "egg": CanonicalKey.EGG_LARGE,
    "eggs": CanonicalKey.EGG_LARGE,
    "oatmeal": CanonicalKey.OATMEAL_DRY,
    "oats": CanonicalKey.OATMEAL_DRY,
    "chicken": CanonicalKey.CHICKEN_BREAST,
    "banana": CanonicalKey.BANANA,
    "apple": CanonicalKey.APPLE,
}

CLASS_TO_GENERIC: dict[str, CanonicalKey] = {
    "hot_dog_link": CanonicalKey.HOT_DOG,
    "pizza_slice": CanonicalKey.PIZZA_SLICE,
    "teriyaki_bowl": CanonicalKey.TERIYAKI_CHICKEN_BOWL,
    "california_roll": CanonicalKey.CALIFORNIA_ROLL,
    "rice_cooked": CanonicalKey.WHITE_RICE_COOKED,
    "egg_large": CanonicalKey.EGG_LARGE,
    "oatmeal_cooked": CanonicalKey.OATMEAL_DRY,
    "chicken_breast": CanonicalKey.CHICKEN_BREAST,
}

# Per-gram estimates by food class when no lookup succeeds.
CLASS_HEURISTICS: dict[str, NutrientProfile] = {
    "hot_dog_link": NutrientProfile(2.9, 0.10, 0.02, 0.26),
    "pizza_slice": NutrientProfile(2.66, 0.11, 0.33, 0.10),
    "teriyaki_bowl": NutrientProfile(1.63, 0.12, 0.21, 0.04),
    "california_roll": NutrientProfile(1.29, 0.04, 0.18, 0.06),
    "rice_cooked": NutrientProfile(1.30, 0.027, 0.28, 0.003),
    "egg_large": NutrientProfile(1.55, 0.13, 0.011, 0.11),
    "oatmeal_cooked": NutrientProfile(0.68, 0.024, 0.12, 0.014),
}
DEFAULT_CLASS_HEURISTIC = NutrientProfile(2.0, 0.08, 0.25, 0.08)
HEURISTIC_FIBER_PER_G = 0.02
HEURISTIC_SUGAR_PER_G = 0.05
HEURISTIC_SODIUM_MG_PER_G = 0.4

GENERIC_FOODS: dict[str, GenericFood] = {
    "hot_dog": GenericFood(
        "Hot dog",
        NutrientProfile(290, 10, 2, 26, 0, 1, 1090, 10),
        serving_grams=50,
        canonical_key=CanonicalKey.HOT_DOG,
        aliases=("hotdog", "frank"),
    ),
    "pizza_slice": GenericFood(
        "Pizza slice",
        NutrientProfile(266, 11, 33, 10, 2.3, 3.6, 598, 4.5),
        serving_grams=107,
        canonical_key=CanonicalKey.PIZZA_SLICE,
        aliases=("pizza",),
    ),
    "white_rice": GenericFood(
        "White rice, cooked",
        NutrientProfile(130, 2.7, 28, 0.3, 0.4, 0.1, 1, 0.1),
        serving_grams=158,
        canonical_key=CanonicalKey.WHITE_RICE_COOKED,
        aliases=("rice",),
    ),
    "egg": GenericFood(
        "Egg, large",
        NutrientProfile(155, 13, 1.1, 11, 0, 1.1, 124, 3.3),
        serving_grams=50,
        canonical_key=CanonicalKey.EGG_LARGE,
        aliases=("eggs",),
    ),
    "oatmeal": GenericFood(
        "Oatmeal, cooked",
        NutrientProfile(68, 2.4, 12, 1.4, 1.7, 0.5, 49, 0.2),
        serving_grams=234,
        canonical_key=CanonicalKey.OATMEAL_DRY,
        aliases=("oats", "porridge"),
    ),
    "chicken_breast": GenericFood(
        "Chicken breast, cooked",
        NutrientProfile(165, 31, 0, 3.6, 0, 0, 74, 1.0),
        serving_grams=120,
        canonical_key=CanonicalKey.CHICKEN_BREAST,
        aliases=("chicken",),
    ),
    "banana": GenericFood(
        "Banana",
        NutrientProfile(89, 1.1, 22.8, 0.3, 2.6, 12.2, 1, 0.1),
        serving_grams=118,
        canonical_key=CanonicalKey.BANANA,
    ),
    "apple": GenericFood(
        "Apple",
        NutrientProfile(52, 0.3, 14, 0.2, 2.4, 10.4, 1, 0.0),
        serving_grams=182,
        canonical_key=CanonicalKey.APPLE,
    ),
    "granola": GenericFood(
        "Granola",
        NutrientProfile(471, 10, 64, 20, 7, 24, 26, 3.5),
        serving_grams=50,
    ),
    "greek_yogurt": GenericFood(
        "Greek yogurt, plain",
        NutrientProfile(59, 10, 3.6, 0.4, 0, 3.2, 36, 0.1),
        serving_grams=170,
        aliases=("yogurt",),
    ),
    "whole_wheat_bread": GenericFood(
        "Whole wheat bread",
        NutrientProfile(247, 13, 41, 3.4, 7, 6, 450, 0.7),
        serving_grams=32,
        aliases=("bread", "toast"),
    ),
}

WHOLE_FOOD_PER_100G: dict[str, NutrientProfile] = {
    "apple": NutrientProfile(52, 0.3, 14, 0.2, 2.4, 10.4, 1, 0.0),
    "banana": NutrientProfile(89, 1.1, 22.8, 0.3, 2.6, 12.2, 1, 0.1),
    "orange": NutrientProfile(47, 0.9, 11.8, 0.1, 2.4, 9.4, 0, 0.0),
    "strawberr": NutrientProfile(32, 0.7, 7.7, 0.3, 2.0, 4.9, 1, 0.0),
    "blueberr": NutrientProfile(57, 0.7, 14.5, 0.3, 2.4, 10.0, 1, 0.0),
    "avocado": NutrientProfile(160, 2.0, 8.5, 14.7, 6.7, 0.7, 7, 2.1),
    "tomato": NutrientProfile(18, 0.9, 3.9, 0.2, 1.2, 2.6, 5, 0.0),
    "broccoli": NutrientProfile(34, 2.8, 6.6, 0.4, 2.6, 1.7, 33, 0.0),
    "asparagus": NutrientProfile(20, 2.2, 3.9, 0.1, 2.1, 1.9, 2, 0.0),
    "carrot": NutrientProfile(41, 0.9, 9.6, 0.2, 2.8, 4.7, 69, 0.0),
    "spinach": NutrientProfile(23, 2.9, 3.6, 0.4, 2.2, 0.4, 79, 0.1),
    "potato": NutrientProfile(77, 2.0, 17, 0.1, 2.2, 0.8, 6, 0.0),
    "chicken breast": NutrientProfile(165, 31, 0, 3.6, 0, 0, 74, 1.0),
    "salmon": NutrientProfile(208, 20, 0, 13, 0, 0, 59, 3.1),
    "egg": NutrientProfile(155, 13, 1.1, 11, 0, 1.1, 124, 3.3),
    "rice": NutrientProfile(130, 2.7, 28, 0.3, 0.4, 0.1, 1, 0.1),
    "almond": NutrientProfile(579, 21, 22, 50, 12.5, 4.4, 1, 3.8),
}

_CANONICAL_VALUES = frozenset(key.value for key in CanonicalKey)
_NON_WORD = re.compile(r"[^\w\s]")
_SPACES = re.compile(r"\s+")


def normalize_name(text: str | None) -> str:
    """Lowercase a food name and collapse punctuation and whitespace."""
    cleaned = _NON_WORD.sub(" ", (text or "").lower())
    return _SPACES.sub(" ", cleaned).strip()


def derive_core_noun(title: str | None) -> str | None:
    """Return the core noun of a food title that maps to a canonical key."""
    normalized = normalize_name(title)
    if not normalized:
        return None
    if "hot dog" in normalized:
        return "hot_dog"
    if "california roll" in normalized:
        return "california_roll"
    if "teriyaki" in normalized and "bowl" in normalized:
        return "teriyaki_bowl"
    for token in normalized.split(" "):
        if token in CANONICAL_BY_CORE_NOUN:
            return token
    for token in normalized.split(" "):
        if "pizza" in token:
            return "pizza"
        if "dog" in token:
            return "hot_dog"
        if "rice" in token:
            return "rice_cooked"
        if "oatmeal" in token:
            return "oatmeal"
        if "egg" in token:
            return "egg"
    return None


def canonical_key_for(
    title: str | None = None,
    canonical_key: str | None = None,
    class_id: str | None = None,
) -> CanonicalKey | None:
    """Resolve a canonical key from an explicit key, a title, or a class id."""
    if canonical_key in _CANONICAL_VALUES:
        return CanonicalKey(canonical_key)
    noun = derive_core_noun(title)
    if noun and noun in CANONICAL_BY_CORE_NOUN:
        return CANONICAL_BY_CORE_NOUN[noun]
    if class_id:
        return CLASS_TO_GENERIC.get(class_id)
    return None


def canonical_food(key: CanonicalKey | None) -> CanonicalFood | None:
    """Return the canonical food row for a key."""
    if key is None:
        return None
    return CANONICAL_FOODS.get(key)


def estimate_per_gram_for_class(class_id: str | None) -> NutrientProfile:
    """Return a rough per-gram estimate for a food class."""
    macros = CLASS_HEURISTICS.get(class_id or "", DEFAULT_CLASS_HEURISTIC)
    return NutrientProfile(
        calories=macros.calories,
        protein_g=macros.protein_g,
        carbs_g=macros.carbs_g,
        fat_g=macros.fat_g,
        fiber_g=HEURISTIC_FIBER_PER_G,
        sugar_g=HEURISTIC_SUGAR_PER_G,
        sodium_mg=HEURISTIC_SODIUM_MG_PER_G,
    )


def find_generic_food(slug_or_name: str | None) -> tuple[str, GenericFood] | None:
    """Find a curated generic food by slug, name, or alias."""
    normalized = normalize_name(slug_or_name).replace(" ", "_")
    if not normalized:
        return None
    normalized = normalized.removeprefix("generic_")
    if normalized in GENERIC_FOODS:
        return normalized, GENERIC_FOODS[normalized]
    for slug, food in GENERIC_FOODS.items():
        if normalized in {alias.replace(" ", "_") for alias in food.aliases}:
            return slug, food
    return None


def find_whole_food_per100g(name: str | None) -> tuple[str, NutrientProfile] | None:
    """Match a food name against the whole-food per-100g table."""
    normalized = normalize_name(name)
    if not normalized:
        return None
    keys = sorted(WHOLE_FOOD_PER_100G, key=len, reverse=True)
    for key in keys:
        if normalized.startswith(key):
            return key, WHOLE_FOOD_PER_100G[key]
    for key in keys:
        if key in normalized:
            return key, WHOLE_FOOD_PER_100G[key]
    return None
