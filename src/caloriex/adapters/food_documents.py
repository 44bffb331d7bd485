"""Normalization of raw food documents into domain items.

Store rows and remote API payloads are loosely shaped: any field may be
missing, null or of the wrong type. All defaulting happens here so the
services only ever see complete ``FoodItem`` values.
"""

import math
from collections.abc import Mapping

from caloriex.domain.foods import (
    UNKNOWN_FOOD_NAME,
    FoodItem,
    FoodSource,
    NutrientProfile,
    StandardPortion,
)

# USDA nutrient numbers used in search results.
_REMOTE_NUTRIENT_NUMBERS = {
    "208": "calories",
    "203": "protein",
    "205": "carbohydrates",
    "204": "fat",
}

_NUTRIENT_ALIASES: dict[str, tuple[str, ...]] = {
    "calories": ("calories",),
    "protein": ("protein",),
    "carbohydrates": ("carbohydrates", "carbs"),
    "fat": ("fat",),
    "fiber": ("fiber",),
    "sugar": ("sugar",),
    "sodium": ("sodium",),
    "calcium": ("calcium",),
    "iron": ("iron",),
    "vitamin_a": ("vitaminA", "vitamin_a"),
    "vitamin_c": ("vitaminC", "vitamin_c"),
}

_SOURCE_DEFAULTS: dict[FoodSource, dict[str, str]] = {
    FoodSource.CURATED: {"category": "General", "cuisine": "Indian"},
    FoodSource.CONTRIBUTED: {"category": "", "cuisine": ""},
    FoodSource.RECIPE: {"category": "", "cuisine": ""},
    FoodSource.REMOTE: {"category": "USDA", "cuisine": ""},
}


def parse_food_document(row: Mapping[str, object], source: FoodSource) -> FoodItem:
    """Build a food item from a document store row."""
    defaults = _SOURCE_DEFAULTS[source]
    return FoodItem(
        id=str(row.get("id") or ""),
        name=_first_text(row, "name", "foodName", "templateName")
        or UNKNOWN_FOOD_NAME,
        source=source,
        nutrients=parse_nutrients(row.get("nutrients")),
        category=_first_text(row, "category", "foodCategory", "mealType")
        or defaults["category"],
        description=_first_text(row, "description"),
        is_vegetarian=_as_flag(row.get("isVegetarian")),
        is_vegan=_as_flag(row.get("isVegan")),
        contains_gluten=_as_flag(row.get("containsGluten")),
        contains_onion_garlic=_as_flag(row.get("containsOnionGarlic")),
        contains_root_vegetables=_as_flag(row.get("containsRootVegetables")),
        region=_first_text(row, "region"),
        cuisine=_first_text(row, "cuisine") or defaults["cuisine"],
        allergens=_as_text_tuple(row.get("allergens")),
        standard_portion=_parse_portion(row.get("standardPortion")),
    )


def parse_nutrients(raw: object) -> NutrientProfile:
    """Read a nutrient mapping, defaulting every absent value to zero."""
    if not isinstance(raw, Mapping):
        return NutrientProfile()
    values: dict[str, float] = {}
    for field_name, keys in _NUTRIENT_ALIASES.items():
        for key in keys:
            if raw.get(key) is not None:
                values[field_name] = _as_float(raw[key])
                break
    return NutrientProfile(**values)


def parse_remote_food(payload: Mapping[str, object]) -> FoodItem:
    """Build a food item from a remote search result entry."""
    values: dict[str, float] = {}
    nutrients = payload.get("foodNutrients")
    if isinstance(nutrients, list):
        for nutrient in nutrients:
            if not isinstance(nutrient, Mapping):
                continue
            field_name = _REMOTE_NUTRIENT_NUMBERS.get(
                str(nutrient.get("nutrientNumber"))
            )
            if field_name and field_name not in values:
                values[field_name] = _as_float(nutrient.get("value"))
    return FoodItem(
        id=str(payload.get("fdcId") or ""),
        name=_first_text(payload, "description") or UNKNOWN_FOOD_NAME,
        source=FoodSource.REMOTE,
        nutrients=NutrientProfile(**values),
        category=_first_text(payload, "foodCategory")
        or _SOURCE_DEFAULTS[FoodSource.REMOTE]["category"],
        description=_first_text(payload, "additionalDescriptions"),
    )


def _first_text(row: Mapping[str, object], *keys: str) -> str:
    for key in keys:
        value = row.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def _as_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if not isinstance(value, int | float | str):
        return 0.0
    try:
        result = float(value)
    except (ValueError, OverflowError):
        return 0.0
    # NaN and infinities count as unreadable.
    return result if math.isfinite(result) else 0.0


def _as_flag(value: object) -> bool:
    return value is True


def _as_text_tuple(value: object) -> tuple[str, ...]:
    if not isinstance(value, list | tuple):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _parse_portion(raw: object) -> StandardPortion | None:
    if not isinstance(raw, Mapping):
        return None
    amount = _as_float(raw.get("amount"))
    unit = raw.get("unit")
    if amount <= 0 or not isinstance(unit, str) or not unit:
        return None
    description = raw.get("description")
    return StandardPortion(
        amount=amount,
        unit=unit,
        description=description if isinstance(description, str) else "",
    )
