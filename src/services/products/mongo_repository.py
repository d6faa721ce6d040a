"""MongoDB product store built on the motor async driver."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from src.config import settings
from src.models.product import Product, ProductCreate, ProductListQuery, ProductUpdate
from src.services.products import filters
from src.services.products.errors import ProductNotFoundError, ProductStoreError
from src.services.products.repository import (
    ProductPage,
    ProductRepository,
    update_fields,
    validate_identifier,
)

logger = logging.getLogger(__name__)


def _to_product(document: dict[str, Any]) -> Product:
    """Convert a raw Mongo document into the API representation."""

    data = dict(document)
    data["id"] = str(data.pop("_id"))
    if isinstance(data.get("category"), ObjectId):
        data["category"] = str(data["category"])
    return Product(**data)


class MongoProductRepository(ProductRepository):
    """Product store persisting documents in a MongoDB collection."""

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        client: AsyncIOMotorClient | None = None,
    ) -> None:
        self._collection = collection
        self._client = client

    async def list_products(self, query: ProductListQuery) -> ProductPage:
        filter_doc = filters.build_filter(query)
        try:
            total, documents = await asyncio.gather(
                self._collection.count_documents(filter_doc),
                self._fetch_page(filter_doc, query.limit, query.offset),
            )
        except PyMongoError as exc:
            raise ProductStoreError(f"Listing products failed: {exc}") from exc

        return ProductPage(
            total=total,
            products=[_to_product(doc) for doc in documents],
        )

    async def _fetch_page(
        self, filter_doc: dict[str, Any], limit: int | None, offset: int
    ) -> list[dict[str, Any]]:
        # Mongo treats limit(0) as "no limit"
        if limit == 0:
            return []

        cursor = self._collection.find(
            filter_doc,
            sort=[("_id", ASCENDING)],
            skip=offset,
            limit=limit or 0,
        )
        return await cursor.to_list(length=None)

    async def find_by_id(self, product_id: str) -> Product:
        object_id = validate_identifier(product_id)
        try:
            document = await self._collection.find_one({"_id": object_id})
        except PyMongoError as exc:
            raise ProductStoreError(f"Fetching product failed: {exc}") from exc

        if document is None:
            raise ProductNotFoundError(product_id)
        return _to_product(document)

    async def create(self, payload: ProductCreate) -> Product:
        document = payload.model_dump()
        document.pop("id", None)
        document.pop("_id", None)
        try:
            result = await self._collection.insert_one(document)
        except PyMongoError as exc:
            raise ProductStoreError(f"Creating product failed: {exc}") from exc

        document["_id"] = result.inserted_id
        logger.info("Created product %s", result.inserted_id)
        return _to_product(document)

    async def update(self, product_id: str, changes: ProductUpdate) -> Product:
        object_id = validate_identifier(product_id)
        fields = update_fields(changes)
        current = await self.find_by_id(product_id)
        if not fields:
            return current
        # The merged document must still load before anything is written
        Product(**{**current.model_dump(), **fields})

        try:
            document = await self._collection.find_one_and_update(
                {"_id": object_id},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            raise ProductStoreError(f"Updating product failed: {exc}") from exc

        if document is None:
            raise ProductNotFoundError(product_id)
        return _to_product(document)

    async def delete_by_id(self, product_id: str) -> None:
        object_id = validate_identifier(product_id)
        try:
            result = await self._collection.delete_one({"_id": object_id})
        except PyMongoError as exc:
            raise ProductStoreError(f"Deleting product failed: {exc}") from exc

        if result.deleted_count == 0:
            raise ProductNotFoundError(product_id)
        logger.info("Deleted product %s", product_id)

    async def ping(self) -> bool:
        if self._client is None:
            return True
        try:
            await self._client.admin.command("ping")
        except PyMongoError:
            logger.warning("MongoDB ping failed", exc_info=True)
            return False
        return True

    async def ensure_indexes(self) -> None:
        """Create the indexes listing queries filter on."""
        await self._collection.create_index([("category", ASCENDING)])
        await self._collection.create_index([("price", ASCENDING)])

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()


def create_mongo_repository(
    url: str | None = None,
    database: str | None = None,
    collection: str | None = None,
) -> MongoProductRepository:
    """Factory function to create a Mongo-backed product store."""
    client: AsyncIOMotorClient = AsyncIOMotorClient(
        url or settings.MONGODB_URL,
        serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
    )
    db = client[database or settings.MONGODB_DATABASE]
    return MongoProductRepository(
        db[collection or settings.PRODUCTS_COLLECTION],
        client=client,
    )
