"""Product access interface shared by every store implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from bson import ObjectId

from src.models.product import Product, ProductCreate, ProductListQuery, ProductUpdate
from src.services.products.errors import MalformedIdentifierError

# Fields callers may never overwrite through an update
_PROTECTED_FIELDS = ("id", "_id")


@dataclass
class ProductPage:
    """A page of products together with the unpaginated match count."""

    total: int
    products: list[Product] = field(default_factory=list)


def validate_identifier(product_id: str) -> ObjectId:
    """Parse a product id, raising ``MalformedIdentifierError`` when invalid."""

    if not ObjectId.is_valid(product_id):
        raise MalformedIdentifierError(product_id)
    return ObjectId(product_id)


def update_fields(changes: ProductUpdate) -> dict[str, Any]:
    """Return only the fields the caller actually sent."""

    fields = changes.model_dump(exclude_unset=True)
    for name in _PROTECTED_FIELDS:
        fields.pop(name, None)
    return fields


class ProductRepository(ABC):
    """Abstract product store used by the API layer."""

    @abstractmethod
    async def list_products(self, query: ProductListQuery) -> ProductPage:
        """Return the page of products matching ``query``."""

    async def find_all(self, query: ProductListQuery) -> ProductPage:
        return await self.list_products(query.model_copy(update={"category_id": None}))

    async def find_by_category(
        self, category_id: str, query: ProductListQuery
    ) -> ProductPage:
        return await self.list_products(
            query.model_copy(update={"category_id": category_id})
        )

    async def search(
        self, keyword: str, limit: int | None = None, offset: int = 0
    ) -> ProductPage:
        """Title search without any price bounds."""

        query = ProductListQuery(
            search_query=keyword,
            min_price=None,
            limit=limit,
            offset=offset,
        )
        return await self.list_products(query)

    @abstractmethod
    async def find_by_id(self, product_id: str) -> Product:
        """Return one product or raise a not-found / malformed-id error."""

    @abstractmethod
    async def create(self, payload: ProductCreate) -> Product:
        """Persist a new product and return it with its generated id."""

    @abstractmethod
    async def update(self, product_id: str, changes: ProductUpdate) -> Product:
        """Merge ``changes`` into the stored product and return the result."""

    @abstractmethod
    async def delete_by_id(self, product_id: str) -> None:
        """Remove a product."""

    async def ping(self) -> bool:
        """Return True when the backing store is reachable."""
        return True

    async def ensure_indexes(self) -> None:
        return None

    async def close(self) -> None:
        return None
