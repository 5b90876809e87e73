"""Rule-based whole food / packaged classification."""

import re

from food_scoring.domain.classification import FoodClassificationInput, FoodKind

PROCESSED_SLUG_HINTS = (
    "granola",
    "bread",
    "cheese",
    "bar",
    "cereal",
    "chip",
    "cracker",
    "cookie",
    "candy",
    "soda",
    "sauce",
    "dressing",
    "yogurt",
    "sausage",
    "bacon",
    "ham",
    "hot_dog",
    "pizza",
    "pasta",
    "tortilla",
    "jerky",
    "juice",
)

PRODUCE_NAME_HINTS = (
    "apple",
    "banana",
    "orange",
    "berry",
    "berries",
    "blueberry",
    "blueberries",
    "strawberry",
    "strawberries",
    "raspberry",
    "raspberries",
    "blackberry",
    "blackberries",
    "cranberry",
    "cranberries",
    "grape",
    "pear",
    "peach",
    "mango",
    "pineapple",
    "melon",
    "avocado",
    "tomato",
    "broccoli",
    "spinach",
    "kale",
    "lettuce",
    "carrot",
    "asparagus",
    "cucumber",
    "pepper",
    "potato",
    "onion",
    "zucchini",
    "cauliflower",
)

PROTEIN_AND_GRAIN_NAME_HINTS = (
    "egg",
    "chicken breast",
    "salmon",
    "tuna",
    "shrimp",
    "steak",
    "beef",
    "turkey",
    "tofu",
    "lentil",
    "bean",
    "chickpea",
    "almond",
    "walnut",
    "cashew",
    "peanut",
    "oats",
    "oatmeal",
    "quinoa",
    "rice",
)

PROCESSED_NAME_HINTS = (
    *(hint.replace("_", " ") for hint in PROCESSED_SLUG_HINTS),
    "candies",
    "pie",
    "cake",
    "muffin",
    "donut",
    "pastry",
    "jelly",
    "gummy",
    "licorice",
    "treat",
    "fries",
    "nugget",
    "pepperoni",
    "salami",
    "burger",
    "sandwich",
    "butter",
    "ice cream",
)

PACKAGED_CATEGORY_HINTS = ("packaged", "processed", "snack", "beverage")


def _name_pattern(hints: tuple[str, ...]) -> re.Pattern[str]:
    words = "|".join(re.escape(hint) for hint in hints)
    return re.compile(rf"\b(?:{words})(?:s|es)?\b", re.IGNORECASE)


_PROCESSED_NAME = _name_pattern(PROCESSED_NAME_HINTS)
_WHOLE_FOOD_NAME = _name_pattern(PRODUCE_NAME_HINTS + PROTEIN_AND_GRAIN_NAME_HINTS)


def classify_food_kind(food: FoodClassificationInput) -> FoodKind:
    """Classify a food item; the first matching rule wins."""
    if _has_text(food.upc) or _has_text(food.ingredients):
        return FoodKind.PACKAGED

    if _has_text(food.generic_slug):
        slug = food.generic_slug.lower()
        if any(hint in slug for hint in PROCESSED_SLUG_HINTS):
            return FoodKind.PACKAGED
        return FoodKind.WHOLE_FOOD

    name = food.name or ""
    if name and not _PROCESSED_NAME.search(name) and _WHOLE_FOOD_NAME.search(name):
        return FoodKind.WHOLE_FOOD

    for category in food.categories:
        category_lower = str(category).lower()
        if any(hint in category_lower for hint in PACKAGED_CATEGORY_HINTS):
            return FoodKind.PACKAGED

    return FoodKind.AMBIGUOUS


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())
