"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from caloriex.api.admin import router as admin_router
from caloriex.api.models import FoodItemModel, FoodListResponse, FoodSearchResponse
from caloriex.app_logging import configure_logging
from caloriex.containers import AppContainer
from caloriex.services.food_proxy import (
    FoodProxyError,
    FoodProxyNotConfiguredError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/foods/search")
    async def search_foods(
        request: Request,
        q: str = "",
        limit: int = Query(default=20, ge=0, le=100),
    ) -> FoodSearchResponse:
        """Search every food source."""
        state_container: AppContainer = request.app.state.container
        items = await state_container.food_search_service.search(q, limit)
        return FoodSearchResponse(
            query=q,
            count=len(items),
            items=[FoodItemModel.from_domain(item) for item in items],
        )

    @app.get("/api/foods/curated/{food_id}")
    async def curated_food(food_id: str, request: Request) -> FoodItemModel:
        """Return a curated food by id."""
        state_container: AppContainer = request.app.state.container
        item = state_container.food_search_service.get_curated_food(food_id)
        if item is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return FoodItemModel.from_domain(item)

    @app.get("/api/foods/meal-type/{meal_type}")
    async def meal_type_foods(
        meal_type: str,
        request: Request,
        diet: str | None = None,
        allergies: str | None = None,
    ) -> FoodListResponse:
        """Return foods for a meal type filtered by diet and allergies."""
        state_container: AppContainer = request.app.state.container
        items = await state_container.food_search_service.foods_for_meal_type(
            meal_type, diet_preference=diet, allergies=_parse_csv(allergies)
        )
        return FoodListResponse(
            count=len(items),
            items=[FoodItemModel.from_domain(item) for item in items],
        )

    @app.get("/api/food-search", response_model=None)
    async def food_search_proxy(
        request: Request,
        action: str | None = None,
        query: str | None = None,
        fdc_id: str | None = Query(default=None, alias="fdcId"),
    ) -> dict[str, object] | JSONResponse:
        """Proxy FoodData Central search and detail lookups."""
        state_container: AppContainer = request.app.state.container
        proxy = state_container.food_proxy_service
        try:
            if action == "search" and query:
                return await proxy.search(query)
            if action == "details" and fdc_id:
                return await proxy.details(fdc_id)
        except FoodProxyNotConfiguredError as exc:
            return _error_response(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        except FoodProxyError as exc:
            logger.exception("USDA API error", extra={"action": action})
            return _error_response(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return _error_response(
            "Invalid action or missing parameters", status.HTTP_400_BAD_REQUEST
        )

    return app


def _parse_csv(raw: str | None) -> list[str]:
    if raw is None:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]


def _error_response(message: str, status_code: int) -> JSONResponse:
    """Return a JSON error body."""
    return JSONResponse({"error": message}, status_code=status_code)
