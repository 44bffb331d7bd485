"""Food search across the curated, contributed, recipe and remote sources."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from caloriex.adapters.food_documents import parse_remote_food
from caloriex.adapters.food_search_proxy_client import FoodSearchProxyClient
from caloriex.domain.foods import FoodItem, FoodSource
from caloriex.services.diet import contains_allergen, is_food_suitable_for_diet

_logger = logging.getLogger(__name__)

SourceFetch = Callable[[], Awaitable[list[FoodItem]]]


class FoodRepository(Protocol):
    """Read interface for a food table."""

    def list_candidates(self, limit: int) -> list[FoodItem]:
        """Return up to ``limit`` rows without filtering."""

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a food by id, if present."""


class CuratedFoodRepository(FoodRepository, Protocol):
    """Read interface for the curated table, which carries keyword arrays."""

    def search_by_keyword(self, keyword: str, limit: int) -> list[FoodItem]:
        """Return rows whose keyword list contains ``keyword``."""


@dataclass(frozen=True)
class SourceOutcome:
    """Result of one source lookup: its items, or the error that stopped it."""

    source: FoodSource
    items: list[FoodItem] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Return true when the source completed."""
        return self.error is None


async def settle_all(fetches: Mapping[FoodSource, SourceFetch]) -> list[SourceOutcome]:
    """Run every fetch concurrently and report each outcome.

    A failing source never cancels its siblings; it reports an empty
    outcome carrying the error instead.
    """
    async with asyncio.TaskGroup() as group:
        tasks = [
            group.create_task(_settle(source, fetch))
            for source, fetch in fetches.items()
        ]
    return [task.result() for task in tasks]


async def _settle(source: FoodSource, fetch: SourceFetch) -> SourceOutcome:
    try:
        items = await fetch()
    except Exception as exc:
        _logger.exception("Food source %s failed", source.value)
        return SourceOutcome(source=source, error=exc)
    return SourceOutcome(source=source, items=items)


def rank_by_relevance(items: Iterable[FoodItem], term: str) -> list[FoodItem]:
    """Order by exact name match, then prefix match, then name.

    ``term`` must already be lower-cased. The sort is stable, so items with
    equal names keep their incoming order.
    """

    def key(item: FoodItem) -> tuple[bool, bool, str]:
        name = item.name.lower()
        return (name != term, not name.startswith(term), name)

    return sorted(items, key=key)


def matches_term(item: FoodItem, term: str) -> bool:
    """Return true when name, category or description contains ``term``."""
    return (
        term in item.name.lower()
        or term in item.category.lower()
        or term in item.description.lower()
    )


@dataclass
class FoodSearchService:
    """Aggregates food lookups over every configured source."""

    curated_repository: CuratedFoodRepository
    contributed_repository: FoodRepository
    recipe_repository: FoodRepository
    remote_client: FoodSearchProxyClient | None = None
    curated_scan_limit: int = 100
    debug: bool = False

    async def search(self, term: str, limit: int = 20) -> list[FoodItem]:
        """Search every source and return at most ``limit`` ranked items."""
        normalized = term.strip().lower()
        if limit <= 0 or not normalized:
            return []

        outcomes = await settle_all(
            {
                FoodSource.CURATED: lambda: self._search_curated(normalized, limit),
                FoodSource.CONTRIBUTED: lambda: self._search_table(
                    self.contributed_repository, normalized, limit
                ),
                FoodSource.RECIPE: lambda: self._search_table(
                    self.recipe_repository, normalized, limit
                ),
            }
        )
        results = [item for outcome in outcomes for item in outcome.items]

        remote_client = self.remote_client
        if len(results) < limit and remote_client is not None:
            remaining = limit - len(results)
            remote = await _settle(
                FoodSource.REMOTE,
                lambda: self._search_remote(remote_client, normalized, remaining),
            )
            outcomes.append(remote)
            results.extend(remote.items)

        if self.debug:
            _logger.info(
                "Food search: term=%s limit=%s counts=%s",
                normalized,
                limit,
                {outcome.source.value: len(outcome.items) for outcome in outcomes},
            )
        return rank_by_relevance(results, normalized)[:limit]

    def get_curated_food(self, food_id: str) -> FoodItem | None:
        """Return a single curated food by id."""
        return self.curated_repository.get_food(food_id)

    async def foods_for_meal_type(
        self,
        meal_type: str,
        diet_preference: str | None = None,
        allergies: Iterable[str] = (),
    ) -> list[FoodItem]:
        """Return foods tagged for a meal type that fit the diet and allergies."""
        meal = meal_type.strip().lower()
        if not meal:
            return []
        allergy_terms = [allergy for allergy in allergies if allergy.strip()]

        outcomes = await settle_all(
            {
                FoodSource.CURATED: lambda: asyncio.to_thread(
                    self.curated_repository.list_candidates, 50
                ),
                FoodSource.CONTRIBUTED: lambda: asyncio.to_thread(
                    self.contributed_repository.list_candidates, 100
                ),
                FoodSource.RECIPE: lambda: asyncio.to_thread(
                    self.recipe_repository.list_candidates, 100
                ),
            }
        )
        return [
            item
            for outcome in outcomes
            for item in outcome.items
            if meal in item.category.lower()
            and is_food_suitable_for_diet(item, diet_preference)
            and not contains_allergen(item, allergy_terms)
        ]

    async def _search_curated(self, term: str, limit: int) -> list[FoodItem]:
        items = list(
            await asyncio.to_thread(
                self.curated_repository.search_by_keyword, term, limit
            )
        )
        if len(items) < limit / 2:
            seen = {item.id for item in items}
            candidates = await asyncio.to_thread(
                self.curated_repository.list_candidates, self.curated_scan_limit
            )
            for candidate in candidates:
                if candidate.id in seen or not matches_term(candidate, term):
                    continue
                seen.add(candidate.id)
                items.append(candidate)
        return rank_by_relevance(items, term)[:limit]

    async def _search_table(
        self, repository: FoodRepository, term: str, limit: int
    ) -> list[FoodItem]:
        candidates = await asyncio.to_thread(repository.list_candidates, limit * 2)
        return [item for item in candidates if matches_term(item, term)][:limit]

    async def _search_remote(
        self, remote_client: FoodSearchProxyClient, term: str, slots: int
    ) -> list[FoodItem]:
        payload = await remote_client.search(term)
        foods = payload.get("foods")
        if not isinstance(foods, list):
            return []
        entries = [food for food in foods if isinstance(food, Mapping)]
        entries.sort(
            key=lambda food: not str(food.get("description") or "")
            .lower()
            .startswith(term)
        )
        return [parse_remote_food(food) for food in entries[:slots]]
