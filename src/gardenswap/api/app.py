"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gardenswap.config import get_settings
from gardenswap.web.dependencies import get_api_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    yield
    # Shutdown
    await get_api_client().close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Gardenswap API",
        description="Cross-chain swap form and order history over Garden Finance",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from gardenswap.api.routes import health
    from gardenswap.web.controllers import chains_router, orders_router, swaps_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(chains_router, prefix="/api/v1")
    app.include_router(swaps_router, prefix="/api/v1")
    app.include_router(orders_router, prefix="/api/v1")

    return app
