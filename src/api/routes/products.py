"""Routes exposing CRUD and listing operations for products."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.errors import store_call
from src.models.product import (
    MAX_PAGE_VALUE,
    Product,
    ProductCreate,
    ProductListQuery,
    ProductListResponse,
    ProductUpdate,
)
from src.services.products.dependency import ProductRepositoryDependency
from src.services.products.repository import ProductPage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


def _listing_query(
    limit: Annotated[
        int | None,
        Query(ge=0, le=MAX_PAGE_VALUE, description="Page size, unbounded when omitted"),
    ] = None,
    offset: Annotated[int, Query(ge=0, le=MAX_PAGE_VALUE)] = 0,
    search_query: Annotated[str, Query(alias="searchQuery")] = "",
    min_price: Annotated[float, Query(alias="minPrice")] = 0,
    max_price: Annotated[
        float | None, Query(alias="maxPrice", description="Unbounded when omitted")
    ] = None,
) -> ProductListQuery:
    return ProductListQuery(
        limit=limit,
        offset=offset,
        search_query=search_query,
        min_price=min_price,
        max_price=max_price,
    )


ListingQueryDependency = Annotated[ProductListQuery, Depends(_listing_query)]


def _envelope(page: ProductPage) -> ProductListResponse:
    return ProductListResponse(totalProduct=page.total, products=page.products)


@router.get(
    "",
    response_model=ProductListResponse,
    summary="List products with pagination, search and price range",
)
async def get_all_products(
    query: ListingQueryDependency,
    repository: ProductRepositoryDependency,
) -> ProductListResponse:
    page = await store_call(repository.find_all(query))
    logger.debug(
        "Listed %d of %d products (limit=%s, offset=%d)",
        len(page.products),
        page.total,
        query.limit,
        query.offset,
    )
    return _envelope(page)


@router.get(
    "/category/{category_id}",
    response_model=ProductListResponse,
    summary="List the products of one category",
)
async def get_category_products(
    category_id: str,
    query: ListingQueryDependency,
    repository: ProductRepositoryDependency,
) -> ProductListResponse:
    page = await store_call(repository.find_by_category(category_id, query))
    return _envelope(page)


@router.get(
    "/search/{keyword}",
    response_model=ProductListResponse,
    summary="Search products by title keyword",
)
async def search_products(
    keyword: str,
    repository: ProductRepositoryDependency,
    limit: Annotated[int | None, Query(ge=0, le=MAX_PAGE_VALUE)] = None,
    offset: Annotated[int, Query(ge=0, le=MAX_PAGE_VALUE)] = 0,
) -> ProductListResponse:
    """Case-insensitive substring search on titles.

    Without ``limit``/``offset`` every match is returned, so ``totalProduct``
    equals the number of products in the response.
    """
    page = await store_call(repository.search(keyword, limit=limit, offset=offset))
    logger.info("Search for %r matched %d products", keyword, page.total)
    return _envelope(page)


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(
    payload: ProductCreate,
    repository: ProductRepositoryDependency,
) -> Product:
    product = await store_call(repository.create(payload))
    logger.info("Created product %s (%s)", product.id, product.title)
    return product


@router.get(
    "/{product_id}",
    response_model=Product,
    summary="Fetch a single product",
)
async def get_product(
    product_id: str,
    repository: ProductRepositoryDependency,
) -> Product:
    return await store_call(repository.find_by_id(product_id))


@router.api_route(
    "/{product_id}",
    methods=["PUT", "PATCH"],
    response_model=Product,
    summary="Partially update a product",
)
async def update_product(
    product_id: str,
    changes: ProductUpdate,
    repository: ProductRepositoryDependency,
) -> Product:
    product = await store_call(repository.update(product_id, changes))
    logger.info("Updated product %s", product_id)
    return product


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    repository: ProductRepositoryDependency,
) -> Response:
    await store_call(repository.delete_by_id(product_id))
    logger.info("Deleted product %s", product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
