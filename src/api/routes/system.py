"""System-level routes such as health checks."""

from __future__ import annotations

from fastapi import APIRouter

from src.config import settings
from src.services.products.dependency import ProductRepositoryDependency

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Hello World endpoint used by smoke tests."""

    return {"message": "Hello World"}


@router.get("/health")
async def health_check(repository: ProductRepositoryDependency) -> dict[str, str]:
    """Health check endpoint with product store connectivity check."""

    try:
        store_status = "connected" if await repository.ping() else "disconnected"
    except Exception:
        store_status = "disconnected"

    return {
        "status": "healthy",
        "store": store_status,
        "environment": settings.ENVIRONMENT,
    }
