"""Tests for the MongoDB product store using mongomock."""

from __future__ import annotations

import pytest
from bson import ObjectId
from pydantic import ValidationError

from src.models.product import ProductCreate, ProductListQuery, ProductUpdate
from src.services.products.errors import (
    MalformedIdentifierError,
    ProductNotFoundError,
)


def _product(title: str, price: float, category: str = "cat-1") -> ProductCreate:
    return ProductCreate(title=title, price=price, category=category)


async def _seed(repository, *products: ProductCreate):
    return [await repository.create(product) for product in products]


@pytest.mark.asyncio
async def test_create_assigns_object_id(mongo_repository):
    product = await mongo_repository.create(_product("Desk", 120))

    assert ObjectId.is_valid(product.id)
    assert product.title == "Desk"
    fetched = await mongo_repository.find_by_id(product.id)
    assert fetched == product


@pytest.mark.asyncio
async def test_find_all_counts_before_paging(mongo_repository):
    await _seed(
        mongo_repository,
        _product("Red shoe", 10),
        _product("Blue shoe", 15),
        _product("Green shoe", 20),
        _product("Shoe rack", 35),
        _product("Hat", 15),
    )
    query = ProductListQuery(search_query="SHOE", min_price=10, max_price=20)

    full = await mongo_repository.find_all(query)
    paged = await mongo_repository.find_all(
        query.model_copy(update={"limit": 1, "offset": 1})
    )

    assert full.total == 3
    assert [p.title for p in full.products] == ["Red shoe", "Blue shoe", "Green shoe"]
    assert paged.total == 3
    assert [p.title for p in paged.products] == ["Blue shoe"]


@pytest.mark.asyncio
async def test_zero_limit_returns_no_rows(mongo_repository):
    await _seed(mongo_repository, _product("Lamp", 5), _product("Lamp shade", 6))

    page = await mongo_repository.find_all(ProductListQuery(limit=0))

    assert page.total == 2
    assert page.products == []


@pytest.mark.asyncio
async def test_find_by_category_matches_object_id_references(mongo_repository):
    category_id = ObjectId()
    await mongo_repository._collection.insert_one(
        {"title": "Sofa", "price": 500, "category": category_id}
    )
    await _seed(mongo_repository, _product("Chair", 50, str(category_id)))
    await _seed(mongo_repository, _product("Chair", 50, "other"))

    page = await mongo_repository.find_by_category(
        str(category_id), ProductListQuery()
    )

    assert page.total == 2
    assert {p.title for p in page.products} == {"Sofa", "Chair"}
    assert all(p.category == str(category_id) for p in page.products)


@pytest.mark.asyncio
async def test_search_treats_keyword_literally(mongo_repository):
    await _seed(
        mongo_repository,
        _product("C++ Primer", 40),
        _product("CCC", 40),
        _product("c++ cheat sheet", 2),
    )

    page = await mongo_repository.search("C++")

    assert page.total == 2
    assert [p.title for p in page.products] == ["C++ Primer", "c++ cheat sheet"]


@pytest.mark.asyncio
async def test_update_merges_fields(mongo_repository):
    (product,) = await _seed(mongo_repository, _product("Desk", 120))

    updated = await mongo_repository.update(
        product.id, ProductUpdate(price=99, description="Oak")
    )

    assert updated.price == 99
    assert updated.description == "Oak"
    assert updated.title == "Desk"


@pytest.mark.asyncio
async def test_update_without_changes_returns_current(mongo_repository):
    (product,) = await _seed(mongo_repository, _product("Desk", 120))

    assert await mongo_repository.update(product.id, ProductUpdate()) == product


@pytest.mark.asyncio
async def test_delete_removes_document(mongo_repository):
    (product,) = await _seed(mongo_repository, _product("Desk", 120))

    await mongo_repository.delete_by_id(product.id)

    with pytest.raises(ProductNotFoundError):
        await mongo_repository.find_by_id(product.id)
    with pytest.raises(ProductNotFoundError):
        await mongo_repository.delete_by_id(product.id)


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["find", "update", "delete"])
async def test_missing_and_malformed_ids(mongo_repository, operation):
    calls = {
        "find": lambda pid: mongo_repository.find_by_id(pid),
        "update": lambda pid: mongo_repository.update(pid, ProductUpdate(title="x")),
        "delete": lambda pid: mongo_repository.delete_by_id(pid),
    }

    with pytest.raises(ProductNotFoundError):
        await calls[operation](str(ObjectId()))
    with pytest.raises(MalformedIdentifierError):
        await calls[operation]("bad-id")


@pytest.mark.asyncio
async def test_ensure_indexes_and_ping(mongo_repository):
    await mongo_repository.ensure_indexes()

    assert await mongo_repository.ping() is True


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["title", "price", "category", "images"])
async def test_null_updates_are_rejected_before_storage(mongo_repository, field):
    (product,) = await _seed(mongo_repository, _product("Lamp", 30))

    with pytest.raises(ValidationError):
        await mongo_repository.update(product.id, ProductUpdate(**{field: None}))

    page = await mongo_repository.find_all(ProductListQuery())
    assert page.products == [product]


@pytest.mark.asyncio
async def test_search_includes_documents_without_price(mongo_repository):
    await mongo_repository._collection.insert_one(
        {"title": "Desk lamp", "category": "c"}
    )
    await _seed(mongo_repository, _product("Lamp shade", 6))

    page = await mongo_repository.search("lamp")
    listing = await mongo_repository.find_all(ProductListQuery())

    assert page.total == 2
    assert [p.title for p in page.products] == ["Desk lamp", "Lamp shade"]
    assert page.products[0].price is None
    assert listing.total == 1
