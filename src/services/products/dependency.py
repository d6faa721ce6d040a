"""FastAPI dependency wiring for the product store."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends

from src.config import settings
from src.services.products.memory_repository import InMemoryProductRepository
from src.services.products.mongo_repository import create_mongo_repository
from src.services.products.repository import ProductRepository

logger = logging.getLogger(__name__)

_product_repository: ProductRepository | None = None


def _initialize_repository() -> ProductRepository:
    if settings.uses_memory_store:
        logger.info("Using in-memory product store")
        return InMemoryProductRepository()

    logger.info(
        "Using MongoDB product store (database=%s, collection=%s)",
        settings.MONGODB_DATABASE,
        settings.PRODUCTS_COLLECTION,
    )
    return create_mongo_repository()


def get_product_repository() -> ProductRepository:
    """Return a singleton product store for the current process."""

    global _product_repository
    if _product_repository is None:
        _product_repository = _initialize_repository()
    return _product_repository


ProductRepositoryDependency = Annotated[
    ProductRepository, Depends(get_product_repository)
]
