"""Normalization of heterogeneous nutrient payloads to a per-gram basis."""

import math
import re
from collections.abc import Mapping

from food_scoring.domain.classification import FoodSource
from food_scoring.domain.food_items import LoggableFoodItem
from food_scoring.domain.nutrients import (
    NormalizedNutrients,
    NutrientBasis,
    NutrientProfile,
)

# Accepted payload keys per nutrient, in priority order.
NUTRIENT_ALIASES: dict[str, tuple[str, ...]] = {
    "calories": (
        "calories",
        "kcal",
        "energy_kcal",
        "energyKcal",
        "calories_kcal",
    ),
    "protein_g": ("protein", "protein_g", "proteins", "protein_total_g"),
    "carbs_g": (
        "carbs",
        "carbs_g",
        "carbohydrates",
        "carbohydrates_total_g",
        "carbohydrate",
        "total_carbs",
    ),
    "fat_g": ("fat", "fat_g", "fat_total_g", "total_fat"),
    "sugar_g": ("sugar", "sugar_g", "sugars", "sugars_g"),
    "fiber_g": ("fiber", "fiber_g", "fibre", "fibre_g", "fiber_total_g"),
    "sodium_mg": ("sodium", "sodium_mg"),
    "saturated_fat_g": (
        "saturated_fat",
        "saturated_fat_g",
        "sat_fat",
        "fat_saturated_g",
    ),
}

ATWATER_PROTEIN = 4
ATWATER_CARBS = 4
ATWATER_FAT = 9
KJ_PER_KCAL = 4.184
SODIUM_PER_SALT = 0.393
DEFAULT_PORTION_GRAMS = 100

_PER_100G_KEYS = ("per100g", "per_100g")
_PER_SERVING_KEYS = ("perServing", "per_serving")
_SERVING_GRAMS_KEYS = ("servingGrams", "serving_grams", "serving_size_g")
_SERVING_SIZE = re.compile(r"([\d.]+)\s*([a-zA-Z]+)?")
_INGREDIENT_SPLIT = re.compile(r"[,;•·()]")
_TAG_PREFIX = re.compile(r"^(en|fr|es):")


def normalize_nutrients(
    payload: Mapping[str, object] | None, serving_grams: float | None = None
) -> NormalizedNutrients:
    """Resolve a nutrition payload into per-gram values with its basis."""
    data = payload if isinstance(payload, Mapping) else {}
    nested = data.get("nutrients")
    nested = nested if isinstance(nested, Mapping) else {}

    per100 = _first_mapping(data, _PER_100G_KEYS)
    per_serving = _first_mapping(data, _PER_SERVING_KEYS)
    grams = serving_grams or _first_number(data, _SERVING_GRAMS_KEYS)

    if per100 is not None:
        values = _resolve_values((per100, data, nested))
        return NormalizedNutrients(
            basis=NutrientBasis.PER_100G,
            per_gram=NutrientProfile(**values).scaled(1 / 100),
        )

    if per_serving is not None and grams and grams > 0:
        values = _resolve_values((per_serving, data, nested))
        return NormalizedNutrients(
            basis=NutrientBasis.PER_SERVING,
            per_gram=NutrientProfile(**values).scaled(1 / grams),
            serving_grams=grams,
        )

    # Raw nutrients are treated as per-100g equivalents.
    values = _resolve_values((data, nested))
    for key in ("protein_g", "carbs_g", "fat_g"):
        if values[key] is None:
            values[key] = 0.0
    if values["calories"] is None:
        values["calories"] = (
            ATWATER_PROTEIN * values["protein_g"]
            + ATWATER_CARBS * values["carbs_g"]
            + ATWATER_FAT * values["fat_g"]
        )
    return NormalizedNutrients(
        basis=NutrientBasis.PER_100G,
        per_gram=NutrientProfile(**values).scaled(1 / 100),
    )


def resolve_nutrient(
    key: str, *sources: Mapping[str, object] | None
) -> float | None:
    """Return the first numeric value found for a nutrient across sources."""
    for source in sources:
        if not isinstance(source, Mapping):
            continue
        for alias in NUTRIENT_ALIASES[key]:
            value = _to_number(source.get(alias))
            if value is not None:
                return value
    return None


def scale_to_portion(per_gram: NutrientProfile, grams: float) -> NutrientProfile:
    """Scale per-gram nutrients to a portion for display."""
    scaled = per_gram.scaled(grams)
    values: dict[str, float | None] = {}
    for key, value in scaled.as_dict().items():
        if value is None:
            values[key] = None
        elif key == "calories":
            values[key] = round_half_up(value)
        else:
            values[key] = round_half_up(value, 1)
    return NutrientProfile(**values)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round to ``ndigits`` decimals with halves rounded up."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def to_food_item(raw: Mapping[str, object], index: int) -> LoggableFoodItem:
    """Build a loggable food item from a detection, report, or manual payload."""
    analysis = _mapping(raw.get("analysis"))
    meta = _mapping(raw.get("meta"))
    portion = _mapping(raw.get("portion"))
    meta_portion = _mapping(meta.get("portion"))

    name = _pick(
        raw.get("displayName"),
        raw.get("name"),
        raw.get("productName"),
        raw.get("title"),
        raw.get("canonicalName"),
    )
    grams = _pick_number(
        portion.get("grams"),
        raw.get("grams"),
        raw.get("estimatedGrams"),
        raw.get("portion_estimate"),
        raw.get("defaultGrams"),
        meta_portion.get("grams"),
    )
    nutrition = _mapping(
        _pick(
            analysis.get("nutrition"),
            raw.get("nutrition"),
            raw.get("nutritionData"),
            meta.get("nutrition"),
        )
    )
    if not nutrition:
        nutrition = raw
    serving_grams = _pick_number(
        analysis.get("servingGrams"), meta.get("servingGrams")
    )
    ingredients = _pick(
        analysis.get("ingredients"),
        raw.get("ingredients"),
        raw.get("ingredientList"),
        meta.get("ingredients"),
    )
    categories = raw.get("categories")
    confidence = _pick_number(raw.get("confidence"), analysis.get("confidence"))

    return LoggableFoodItem(
        id=str(_pick(raw.get("id"), raw.get("uid")) or f"idx-{index}"),
        name=str(name) if name else f"item-{index + 1}",
        grams=round_half_up(grams) if grams is not None else DEFAULT_PORTION_GRAMS,
        nutrients=normalize_nutrients(nutrition, serving_grams=serving_grams),
        source=parse_food_source(_pick(raw.get("source"), analysis.get("source"))),
        upc=_optional_str(_pick(raw.get("barcode"), raw.get("upc"), raw.get("code"))),
        brand=_optional_str(_pick(raw.get("brand"), raw.get("brands"))),
        generic_slug=_optional_str(
            _pick(raw.get("genericSlug"), raw.get("generic_slug"), raw.get("slug"))
        ),
        ingredients=split_ingredients(ingredients),
        categories=[str(item) for item in categories]
        if isinstance(categories, list)
        else [],
        confidence=confidence,
    )


def normalize_off_product(
    off_product: Mapping[str, object], barcode: str = ""
) -> LoggableFoodItem:
    """Normalize an Open Food Facts product into a loggable barcode item."""
    product = _mapping(off_product.get("product")) or off_product
    nutriments = _mapping(product.get("nutriments"))
    ingredients_text = str(
        _pick(
            product.get("ingredients_text_en") or None,
            product.get("ingredients_text") or None,
            product.get("ingredients_text_es") or None,
            product.get("ingredients_text_fr") or None,
        )
        or ""
    )
    raw_ingredients = product.get("ingredients")
    if isinstance(raw_ingredients, list):
        ingredients = []
        for ingredient in raw_ingredients:
            text = (
                _pick(ingredient.get("text"), ingredient.get("id"))
                if isinstance(ingredient, Mapping)
                else ingredient
            )
            if text:
                ingredients.append(str(text))
    else:
        ingredients = split_ingredients(ingredients_text)

    serving_grams = parse_serving_grams(product.get("serving_size"))
    per_serving = product.get("nutrition_data_per") == "serving" and serving_grams
    suffix = "_serving" if per_serving else "_100g"
    values = _off_values(nutriments, suffix)
    if per_serving:
        payload: dict[str, object] = {
            "perServing": values,
            "servingGrams": serving_grams,
        }
    else:
        payload = {"per100g": values}

    brands = product.get("brands")
    return LoggableFoodItem(
        id=barcode or str(product.get("code") or ""),
        name=str(
            product.get("product_name")
            or product.get("generic_name")
            or "Unknown product"
        ),
        grams=serving_grams or DEFAULT_PORTION_GRAMS,
        nutrients=normalize_nutrients(payload),
        source=FoodSource.BARCODE,
        upc=barcode or _optional_str(product.get("code")),
        brand=str(brands).split(",")[0].strip() if brands else None,
        ingredients=ingredients,
        categories=_off_tags(product.get("categories_tags")),
        additives=_off_tags(
            product.get("additives_tags") or product.get("additives_original_tags")
        ),
        allergens=_off_tags(product.get("allergens_tags")),
    )


def parse_food_source(value: object) -> FoodSource:
    """Map a capture source label to a food source, defaulting to ``db``."""
    if isinstance(value, str):
        label = value.strip().lower()
        if label == "photo":
            return FoodSource.PHOTO_ITEM
        for source in FoodSource:
            if source.value == label:
                return source
    return FoodSource.DB


def parse_serving_grams(serving_size: object) -> float | None:
    """Parse grams from a serving size label such as ``"39 g"``."""
    if isinstance(serving_size, int | float) and not isinstance(serving_size, bool):
        return float(serving_size) if serving_size > 0 else None
    if not isinstance(serving_size, str):
        return None
    match = _SERVING_SIZE.search(serving_size.strip())
    if not match:
        return None
    unit = (match.group(2) or "g").lower()
    if unit not in {"g", "gr", "gram", "grams", "ml"}:
        return None
    try:
        amount = float(match.group(1))
    except ValueError:
        return None
    return amount if amount > 0 else None


def split_ingredients(value: object) -> list[str]:
    """Split an ingredient list or text into trimmed ingredient names."""
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    if not isinstance(value, str) or not value:
        return []
    return [part.strip() for part in _INGREDIENT_SPLIT.split(value) if part.strip()]


def _off_values(nutriments: Mapping[str, object], suffix: str) -> dict[str, object]:
    energy_kcal = _to_number(nutriments.get(f"energy-kcal{suffix}"))
    if energy_kcal is None:
        energy_kj = _to_number(nutriments.get(f"energy{suffix}"))
        energy_kcal = energy_kj / KJ_PER_KCAL if energy_kj else None
    sodium_g = _to_number(nutriments.get(f"sodium{suffix}"))
    salt_g = _to_number(nutriments.get(f"salt{suffix}"))
    if sodium_g is not None:
        sodium_mg: float | None = round_half_up(sodium_g * 1000)
    elif salt_g is not None:
        sodium_mg = round_half_up(salt_g * 1000 * SODIUM_PER_SALT)
    else:
        sodium_mg = None
    return {
        "calories": round_half_up(energy_kcal) if energy_kcal else None,
        "protein_g": _to_number(nutriments.get(f"proteins{suffix}")),
        "carbs_g": _to_number(nutriments.get(f"carbohydrates{suffix}")),
        "fat_g": _to_number(nutriments.get(f"fat{suffix}")),
        "sugar_g": _to_number(nutriments.get(f"sugars{suffix}")),
        "fiber_g": _to_number(nutriments.get(f"fiber{suffix}")),
        "sodium_mg": sodium_mg,
        "saturated_fat_g": _to_number(nutriments.get(f"saturated-fat{suffix}")),
    }


def _off_tags(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    tags = [_TAG_PREFIX.sub("", str(tag)).lower() for tag in value]
    return [tag for tag in tags if tag]


def _resolve_values(
    sources: tuple[Mapping[str, object], ...],
) -> dict[str, float | None]:
    return {key: resolve_nutrient(key, *sources) for key in NUTRIENT_ALIASES}


def _first_mapping(
    data: Mapping[str, object], keys: tuple[str, ...]
) -> Mapping[str, object] | None:
    for key in keys:
        value = data.get(key)
        if isinstance(value, Mapping):
            return value
    return None


def _first_number(data: Mapping[str, object], keys: tuple[str, ...]) -> float | None:
    return _pick_number(*(data.get(key) for key in keys))


def _mapping(value: object) -> Mapping[str, object]:
    return value if isinstance(value, Mapping) else {}


def _pick(*values: object) -> object | None:
    for value in values:
        if value is not None:
            return value
    return None


def _pick_number(*values: object) -> float | None:
    for value in values:
        number = _to_number(value)
        if number is not None:
            return number
    return None


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None
