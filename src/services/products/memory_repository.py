"""In-memory product store used for local runs and tests."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any

from bson import ObjectId

from src.models.product import Product, ProductCreate, ProductListQuery, ProductUpdate
from src.services.products import filters
from src.services.products.errors import ProductNotFoundError
from src.services.products.repository import (
    ProductPage,
    ProductRepository,
    update_fields,
    validate_identifier,
)

logger = logging.getLogger(__name__)


class InMemoryProductRepository(ProductRepository):
    """Naive dict-backed product store keeping insertion order."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._storage: dict[str, dict[str, Any]] = {}

    async def list_products(self, query: ProductListQuery) -> ProductPage:
        with self._lock:
            matching = [
                doc for doc in self._storage.values() if filters.matches(doc, query)
            ]
        products = [
            Product(**doc) for doc in filters.page(matching, query.limit, query.offset)
        ]
        return ProductPage(total=len(matching), products=products)

    async def find_by_id(self, product_id: str) -> Product:
        key = self._key(product_id)
        with self._lock:
            return Product(**self._get(key, product_id))

    async def create(self, payload: ProductCreate) -> Product:
        product_id = str(ObjectId())
        document = {**payload.model_dump(), "id": product_id}
        with self._lock:
            self._storage[product_id] = document

        logger.info("Stored product %s in memory", product_id)
        return Product(**document)

    async def update(self, product_id: str, changes: ProductUpdate) -> Product:
        key = self._key(product_id)
        fields = update_fields(changes)
        with self._lock:
            document = {**self._get(key, product_id), **fields}
            product = Product(**document)
            self._storage[key] = document
        return product

    async def delete_by_id(self, product_id: str) -> None:
        key = self._key(product_id)
        with self._lock:
            self._get(key, product_id)
            del self._storage[key]

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()

    @staticmethod
    def _key(product_id: str) -> str:
        return str(validate_identifier(product_id))

    def _get(self, key: str, product_id: str) -> dict[str, Any]:
        document = self._storage.get(key)
        if document is None:
            raise ProductNotFoundError(product_id)
        return document
