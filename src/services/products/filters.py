"""Query helpers shared by the product store implementations."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any, TypeVar

from bson import ObjectId

from src.models.product import ProductListQuery

T = TypeVar("T")


def title_pattern(text: str) -> str:
    """Regex matching ``text`` as a literal substring."""

    return re.escape(text)


def category_values(category_id: str) -> list[Any]:
    """Values a stored ``category`` field may hold for the given id."""

    values: list[Any] = [category_id]
    if ObjectId.is_valid(category_id):
        values.append(ObjectId(category_id))
    return values


def build_filter(query: ProductListQuery) -> dict[str, Any]:
    """Translate listing parameters into a MongoDB filter document."""

    filter_doc: dict[str, Any] = {}
    if query.search_query:
        filter_doc["title"] = {
            "$regex": title_pattern(query.search_query),
            "$options": "i",
        }

    price: dict[str, Any] = {}
    if query.min_price is not None:
        price["$gte"] = query.min_price
    if query.max_price is not None:
        price["$lte"] = query.max_price
    if price:
        filter_doc["price"] = price

    if query.category_id is not None:
        filter_doc["category"] = {"$in": category_values(query.category_id)}
    return filter_doc


def matches(document: dict[str, Any], query: ProductListQuery) -> bool:
    """Evaluate the listing predicate against a plain document."""

    if query.search_query:
        title = document.get("title") or ""
        if not re.search(title_pattern(query.search_query), title, re.IGNORECASE):
            return False

    if query.min_price is not None or query.max_price is not None:
        price = document.get("price")
        if price is None:
            return False
        if query.min_price is not None and price < query.min_price:
            return False
        if query.max_price is not None and price > query.max_price:
            return False

    if query.category_id is not None:
        if document.get("category") != query.category_id:
            return False
    return True


def page(items: Sequence[T], limit: int | None, offset: int) -> list[T]:
    """Skip ``offset`` items and keep at most ``limit`` (``None`` keeps all)."""

    if limit is None:
        return list(items[offset:])
    return list(items[offset : offset + limit])
