"""Pydantic response models for the food API."""

from pydantic import BaseModel

from caloriex.domain.foods import FoodItem


class NutrientsModel(BaseModel):
    """Nutrients per 100 g."""

    calories: float
    protein: float
    carbohydrates: float
    fat: float
    fiber: float
    sugar: float
    sodium: float
    calcium: float
    iron: float
    vitamin_a: float
    vitamin_c: float


class StandardPortionModel(BaseModel):
    """Typical serving."""

    amount: float
    unit: str
    description: str = ""


class FoodItemModel(BaseModel):
    """Food item payload."""

    id: str
    name: str
    source: str
    nutrients: NutrientsModel
    category: str
    description: str
    is_vegetarian: bool
    is_vegan: bool
    contains_gluten: bool
    contains_onion_garlic: bool
    contains_root_vegetables: bool
    region: str
    cuisine: str
    allergens: list[str]
    standard_portion: StandardPortionModel | None = None

    @classmethod
    def from_domain(cls, item: FoodItem) -> "FoodItemModel":
        """Build the payload from a domain item."""
        portion = item.standard_portion
        return cls(
            id=item.id,
            name=item.name,
            source=item.source.value,
            nutrients=NutrientsModel(**item.nutrients.as_dict()),
            category=item.category,
            description=item.description,
            is_vegetarian=item.is_vegetarian,
            is_vegan=item.is_vegan,
            contains_gluten=item.contains_gluten,
            contains_onion_garlic=item.contains_onion_garlic,
            contains_root_vegetables=item.contains_root_vegetables,
            region=item.region,
            cuisine=item.cuisine,
            allergens=list(item.allergens),
            standard_portion=(
                StandardPortionModel(
                    amount=portion.amount,
                    unit=portion.unit,
                    description=portion.description,
                )
                if portion
                else None
            ),
        )


class FoodSearchResponse(BaseModel):
    """Search results."""

    query: str
    count: int
    items: list[FoodItemModel]


class FoodListResponse(BaseModel):
    """Unranked list of foods."""

    count: int
    items: list[FoodItemModel]
