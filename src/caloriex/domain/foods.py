"""Food domain models shared by every search source."""

from dataclasses import asdict, dataclass, field
from enum import Enum

UNKNOWN_FOOD_NAME = "Unknown Food"


class FoodSource(str, Enum):
    """Backing data provider a food item came from."""

    CURATED = "curated"
    CONTRIBUTED = "contributed"
    RECIPE = "recipe"
    REMOTE = "remote"


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrients per 100 g; every field is always present."""

    calories: float = 0.0
    protein: float = 0.0
    carbohydrates: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0
    calcium: float = 0.0
    iron: float = 0.0
    vitamin_a: float = 0.0
    vitamin_c: float = 0.0

    def as_dict(self) -> dict[str, float]:
        """Return nutrients as a plain mapping."""
        return asdict(self)


@dataclass(frozen=True)
class StandardPortion:
    """Typical serving for a food."""

    amount: float
    unit: str
    description: str = ""


@dataclass(frozen=True)
class FoodItem:
    """Unified food record returned by search."""

    id: str
    name: str
    source: FoodSource
    nutrients: NutrientProfile = field(default_factory=NutrientProfile)
    category: str = ""
    description: str = ""
    is_vegetarian: bool = False
    is_vegan: bool = False
    contains_gluten: bool = False
    contains_onion_garlic: bool = False
    contains_root_vegetables: bool = False
    region: str = ""
    cuisine: str = ""
    allergens: tuple[str, ...] = ()
    standard_portion: StandardPortion | None = None
