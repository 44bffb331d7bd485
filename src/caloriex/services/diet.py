"""Diet preference and allergen rules for food items."""

from collections.abc import Iterable

from caloriex.domain.foods import FoodItem

HINDU_FASTING_STAPLES = (
    "sabudana",
    "potato",
    "sweet potato",
    "fruit",
    "nuts",
    "milk",
    "curd",
    "makhana",
    "rajgira",
    "singhara",
    "kuttu",
)


def is_food_suitable_for_diet(  # noqa: PLR0911
    food: FoodItem, diet_preference: str | None
) -> bool:
    """Return true when the food fits the diet preference."""
    preference = (diet_preference or "").lower()
    name = food.name.lower()
    category = food.category.lower()
    if preference in {"vegetarian", "indian-vegetarian"}:
        return food.is_vegetarian
    if preference == "vegan":
        return food.is_vegan
    if preference == "eggetarian":
        return food.is_vegetarian or "egg" in name or "egg" in category
    if preference == "gluten-free":
        return not food.contains_gluten
    if preference == "jain-diet":
        return (
            food.is_vegetarian
            and not food.contains_onion_garlic
            and not food.contains_root_vegetables
        )
    if preference == "sattvic-diet":
        return (
            food.is_vegetarian
            and not food.contains_onion_garlic
            and "spicy" not in name
        )
    if preference == "hindu-fasting":
        return any(staple in name for staple in HINDU_FASTING_STAPLES)
    return True


def contains_allergen(food: FoodItem, allergies: Iterable[str]) -> bool:
    """Return true when any allergy term matches the name or allergen list."""
    name = food.name.lower()
    allergens = [allergen.lower() for allergen in food.allergens]
    for allergy in allergies:
        term = allergy.strip().lower()
        if not term:
            continue
        if term in name or any(term in allergen for allergen in allergens):
            return True
    return False
