"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from caloriex.adapters.fdc_client import HttpxFdcClient
from caloriex.adapters.food_search_proxy_client import HttpxFoodSearchProxyClient
from caloriex.adapters.supabase_food_repository import (
    contributed_repository,
    curated_repository,
    recipe_repository,
)
from caloriex.config import Settings
from caloriex.services.cache import Cache, InMemoryCache
from caloriex.services.food_proxy import FoodProxyService
from caloriex.services.food_search import FoodSearchService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_search_service: FoodSearchService
    food_proxy_service: FoodProxyService
    proxy_cache: Cache
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    proxy_client = HttpxFoodSearchProxyClient.create(
        resolved_settings.food_search_proxy_url,
        timeout_seconds=resolved_settings.http_timeout_seconds,
    )
    food_search_service = FoodSearchService(
        curated_repository=curated_repository(supabase_client),
        contributed_repository=contributed_repository(supabase_client),
        recipe_repository=recipe_repository(supabase_client),
        remote_client=proxy_client,
        curated_scan_limit=resolved_settings.curated_scan_limit,
        debug=resolved_settings.debug,
    )
    fdc_client = None
    if resolved_settings.fdc_api_key:
        fdc_client = HttpxFdcClient.create(
            api_key=resolved_settings.fdc_api_key,
            base_url=resolved_settings.fdc_base_url,
            timeout_seconds=resolved_settings.http_timeout_seconds,
        )
    proxy_cache = InMemoryCache(
        default_ttl_seconds=resolved_settings.search_cache_ttl_seconds
    )
    food_proxy_service = FoodProxyService(
        fdc_client=fdc_client,
        cache=proxy_cache,
        ttl_seconds=resolved_settings.search_cache_ttl_seconds,
        debug=resolved_settings.debug,
    )

    async def close_resources() -> None:
        await proxy_client.close()
        if fdc_client is not None:
            await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_search_service=food_search_service,
        food_proxy_service=food_proxy_service,
        proxy_cache=proxy_cache,
        close_resources=close_resources,
    )
