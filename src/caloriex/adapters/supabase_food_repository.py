"""Supabase implementation for the food tables."""

from dataclasses import dataclass

from supabase import Client

from caloriex.adapters.food_documents import parse_food_document
from caloriex.domain.foods import FoodItem, FoodSource
from caloriex.services.food_search import CuratedFoodRepository, FoodRepository

CURATED_TABLE = "ifct_foods"
CONTRIBUTED_TABLE = "food_database"
RECIPES_TABLE = "recipes"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for one food table."""

    client: Client
    table_name: str
    source: FoodSource

    def list_candidates(self, limit: int) -> list[FoodItem]:
        """Return up to ``limit`` rows without server-side filtering."""
        response = (
            self.client.table(self.table_name).select("*").limit(limit).execute()
        )
        return [parse_food_document(row, self.source) for row in response.data or []]

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a row by id, if present."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("id", food_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_food_document(response.data[0], self.source)


@dataclass
class SupabaseCuratedFoodRepository(SupabaseFoodRepository, CuratedFoodRepository):
    """Curated nutrition table with a precomputed keyword array."""

    def search_by_keyword(self, keyword: str, limit: int) -> list[FoodItem]:
        """Return rows whose keyword array contains ``keyword``."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .contains("keywords", [keyword])
            .limit(limit)
            .execute()
        )
        return [parse_food_document(row, self.source) for row in response.data or []]


def curated_repository(client: Client) -> SupabaseCuratedFoodRepository:
    """Create the curated food repository."""
    return SupabaseCuratedFoodRepository(
        client=client, table_name=CURATED_TABLE, source=FoodSource.CURATED
    )


def contributed_repository(client: Client) -> SupabaseFoodRepository:
    """Create the user-contributed food repository."""
    return SupabaseFoodRepository(
        client=client, table_name=CONTRIBUTED_TABLE, source=FoodSource.CONTRIBUTED
    )


def recipe_repository(client: Client) -> SupabaseFoodRepository:
    """Create the recipe repository."""
    return SupabaseFoodRepository(
        client=client, table_name=RECIPES_TABLE, source=FoodSource.RECIPE
    )
