"""Tests for canonical and generic food lookups."""

import pytest

from food_scoring.services.canonical import (
    DEFAULT_CLASS_HEURISTIC,
    CanonicalKey,
    canonical_food,
    canonical_key_for,
    derive_core_noun,
    estimate_per_gram_for_class,
    find_generic_food,
    find_whole_food_per100g,
    normalize_name,
)


def test_normalize_name_collapses_punctuation() -> None:
    assert normalize_name("  Hot-Dog,  Grilled!! ") == "hot dog grilled"
    assert normalize_name(None) == ""


@pytest.mark.parametrize(
    ("title", "noun"),
    [
        ("Grilled hot dog", "hot_dog"),
        ("Spicy California Roll", "california_roll"),
        ("Teriyaki chicken bowl", "teriyaki_bowl"),
        ("Scrambled eggs", "eggs"),
        ("Pepperoni pizzas", "pizza"),
        ("Fried rice", "rice"),
        ("Mystery stew", None),
    ],
)
def test_derive_core_noun(title: str, noun: str | None) -> None:
    assert derive_core_noun(title) == noun


def test_canonical_key_prefers_explicit_key() -> None:
    key = canonical_key_for(title="Banana", canonical_key="generic_apple")
    assert key == CanonicalKey.APPLE


def test_canonical_key_from_title_then_class() -> None:
    assert canonical_key_for(title="Two eggs") == CanonicalKey.EGG_LARGE
    assert canonical_key_for(title="Food", class_id="pizza_slice") == (
        CanonicalKey.PIZZA_SLICE
    )
    assert canonical_key_for(title="Food", class_id="unknown") is None


def test_unknown_canonical_key_falls_back_to_title() -> None:
    key = canonical_key_for(title="Banana", canonical_key="generic_unknown")
    assert key == CanonicalKey.BANANA


def test_canonical_food_has_ingredients() -> None:
    food = canonical_food(CanonicalKey.CALIFORNIA_ROLL)
    assert food is not None
    assert "nori" in food.ingredients
    assert canonical_food(None) is None


def test_find_generic_food_by_slug_alias_and_prefix() -> None:
    assert find_generic_food("granola")[0] == "granola"
    assert find_generic_food("generic_hot_dog")[0] == "hot_dog"
    assert find_generic_food("Hotdog")[0] == "hot_dog"
    assert find_generic_food("toast")[0] == "whole_wheat_bread"
    assert find_generic_food("casserole") is None
    assert find_generic_food(None) is None


def test_find_whole_food_prefers_longest_prefix() -> None:
    key, per100g = find_whole_food_per100g("Chicken breast, grilled")
    assert key == "chicken breast"
    assert per100g.protein_g == 31


def test_find_whole_food_matches_substring_and_plurals() -> None:
    assert find_whole_food_per100g("Fresh strawberries")[0] == "strawberr"
    assert find_whole_food_per100g("Roasted asparagus")[0] == "asparagus"
    assert find_whole_food_per100g("Cheeseburger") is None


def test_estimate_per_gram_for_class() -> None:
    known = estimate_per_gram_for_class("rice_cooked")
    unknown = estimate_per_gram_for_class("mystery")

    assert known.calories == 1.30
    assert known.fiber_g == 0.02
    assert unknown.calories == DEFAULT_CLASS_HEURISTIC.calories
    assert unknown.sodium_mg == 0.4
