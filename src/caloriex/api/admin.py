"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from caloriex.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/cache", dependencies=[Depends(require_admin)])
async def cache_stats(request: Request) -> dict[str, int]:
    """Return the number of cached remote responses."""
    container: AppContainer = request.app.state.container
    return {"entries": len(container.proxy_cache)}


@router.post("/cache/evict", dependencies=[Depends(require_admin)])
async def evict_cache(request: Request) -> dict[str, int]:
    """Drop expired remote responses."""
    container: AppContainer = request.app.state.container
    return {"evicted": container.proxy_cache.evict_expired()}


@router.delete("/cache", dependencies=[Depends(require_admin)])
async def clear_cache(request: Request) -> dict[str, int]:
    """Drop every cached remote response."""
    container: AppContainer = request.app.state.container
    return {"cleared": container.proxy_cache.clear()}


@router.delete("/cache/{key}", dependencies=[Depends(require_admin)])
async def delete_cache_entry(key: str, request: Request) -> dict[str, str]:
    """Drop a single cached remote response."""
    container: AppContainer = request.app.state.container
    if not container.proxy_cache.delete(key):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"deleted": key}
