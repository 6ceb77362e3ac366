"""Health check endpoints."""

from fastapi import APIRouter, Depends

from gardenswap.config import get_settings
from gardenswap.web.dependencies import get_catalog_service, get_session_store
from gardenswap.web.services.catalog_service import CatalogService
from gardenswap.web.services.session_store import SwapSessionStore

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "gardenswap"}


@router.get("/health/detailed")
async def detailed_health(
    catalog: CatalogService = Depends(get_catalog_service),
    store: SwapSessionStore = Depends(get_session_store),
):
    """Health with catalog state and configuration.

    Reports what has been loaded so far; never fetches the catalog itself.
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "gardenswap",
        "version": "0.1.0",
        "catalog": {
            "loaded": catalog.loaded,
            "network_type": catalog.network_type,
            "chains": len(catalog.chains),
        },
        "sessions": len(store),
        "config": settings.get_safe_dict(),
    }
