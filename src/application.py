"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.errors import register_exception_handlers
from src.api.routes import include_api_routes
from src.config import settings
from src.services.products.dependency import get_product_repository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    repository = get_product_repository()
    try:
        await repository.ensure_indexes()
        logger.info("Product store indexes ensured")
    except Exception:
        # The API still serves requests; store errors surface per request
        logger.exception("Failed ensuring product store indexes on startup")

    yield

    await repository.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Products API",
        description="CRUD, listing and search endpoints for store products",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_cors(app)
    register_exception_handlers(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
