"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from caloriex.adapters.fdc_client import FdcClient
from caloriex.adapters.food_search_proxy_client import FoodSearchProxyClient
from caloriex.config import Settings
from caloriex.containers import AppContainer
from caloriex.domain.foods import FoodItem, FoodSource, NutrientProfile
from caloriex.services.cache import InMemoryCache
from caloriex.services.food_proxy import FoodProxyService
from caloriex.services.food_search import (
    CuratedFoodRepository,
    FoodRepository,
    FoodSearchService,
)


def make_food(  # noqa: PLR0913
    name: str,
    source: FoodSource = FoodSource.CURATED,
    food_id: str | None = None,
    category: str = "",
    description: str = "",
    **kwargs: object,
) -> FoodItem:
    """Build a food item with sensible defaults for tests."""
    return FoodItem(
        id=food_id or name.lower().replace(" ", "-"),
        name=name,
        source=source,
        nutrients=NutrientProfile(calories=100, protein=3, carbohydrates=20, fat=1),
        category=category,
        description=description,
        **kwargs,
    )


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food table for tests."""

    items: list[FoodItem] = field(default_factory=list)
    fail: bool = False
    candidate_limits: list[int] = field(default_factory=list)

    def list_candidates(self, limit: int) -> list[FoodItem]:
        self.candidate_limits.append(limit)
        if self.fail:
            raise RuntimeError("table unavailable")
        return self.items[:limit]

    def get_food(self, food_id: str) -> FoodItem | None:
        if self.fail:
            raise RuntimeError("table unavailable")
        for item in self.items:
            if item.id == food_id:
                return item
        return None


@dataclass
class InMemoryCuratedFoodRepository(InMemoryFoodRepository, CuratedFoodRepository):
    """In-memory curated table with keyword arrays."""

    keywords: dict[str, list[str]] = field(default_factory=dict)
    keyword_queries: list[str] = field(default_factory=list)

    def search_by_keyword(self, keyword: str, limit: int) -> list[FoodItem]:
        self.keyword_queries.append(keyword)
        if self.fail:
            raise RuntimeError("table unavailable")
        return [
            item for item in self.items if keyword in self.keywords.get(item.id, [])
        ][:limit]


@dataclass
class FakeFoodSearchProxyClient(FoodSearchProxyClient):
    """Fake remote search client returning a fixed payload."""

    payload: dict[str, object] = field(default_factory=lambda: {"foods": []})
    fail: bool = False
    queries: list[str] = field(default_factory=list)

    async def search(self, query: str) -> dict[str, object]:
        self.queries.append(query)
        if self.fail:
            raise RuntimeError("remote unavailable")
        return self.payload


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "fdcId": 168878,
                    "description": "Rice, white, long-grain, cooked",
                    "foodNutrients": [
                        {"nutrientNumber": "208", "value": 130},
                        {"nutrientNumber": "203", "value": 2.7},
                        {"nutrientNumber": "205", "value": 28.2},
                        {"nutrientNumber": "204", "value": 0.3},
                    ],
                }
            ]
        }
    )
    food_payload: dict[str, object] = field(
        default_factory=lambda: {
            "fdcId": 168878,
            "description": "Rice, white, long-grain, cooked",
            "foodNutrients": [],
        }
    )
    fail: bool = False
    search_calls: int = 0
    food_calls: int = 0

    async def search_foods(
        self, query: str, page_size: int = 25, page_number: int = 1
    ) -> dict[str, object]:
        self.search_calls += 1
        if self.fail:
            raise RuntimeError("fdc unavailable")
        return self.search_payload

    async def get_food(self, fdc_id: str) -> dict[str, object]:
        self.food_calls += 1
        if self.fail:
            raise RuntimeError("fdc unavailable")
        return self.food_payload


@dataclass
class FakeClock:
    """Manually advanced clock."""

    now: datetime = field(default_factory=lambda: datetime(2024, 1, 1, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
        fdc_api_key="fdc-key",
    )


@pytest.fixture
def curated_repository() -> InMemoryCuratedFoodRepository:
    return InMemoryCuratedFoodRepository()


@pytest.fixture
def contributed_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def recipe_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def remote_client() -> FakeFoodSearchProxyClient:
    return FakeFoodSearchProxyClient()


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    curated_repository: InMemoryCuratedFoodRepository,
    contributed_repository: InMemoryFoodRepository,
    recipe_repository: InMemoryFoodRepository,
    remote_client: FakeFoodSearchProxyClient,
    fdc_client: FakeFdcClient,
    clock: FakeClock,
) -> AppContainer:
    food_search_service = FoodSearchService(
        curated_repository=curated_repository,
        contributed_repository=contributed_repository,
        recipe_repository=recipe_repository,
        remote_client=remote_client,
    )
    proxy_cache = InMemoryCache(default_ttl_seconds=3600, clock=clock)
    food_proxy_service = FoodProxyService(fdc_client=fdc_client, cache=proxy_cache)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        food_search_service=food_search_service,
        food_proxy_service=food_proxy_service,
        proxy_cache=proxy_cache,
        close_resources=close_resources,
    )
