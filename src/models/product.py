"""Product domain models and API schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest skip/limit the document store can encode (signed 64-bit)
MAX_PAGE_VALUE = 2**63 - 1


class ProductCreate(BaseModel):
    """Payload accepted when a product is created."""

    model_config = ConfigDict(extra="allow")

    title: str = Field(..., description="Display title, searched case-insensitively")
    price: float = Field(..., ge=0)
    category: str = Field(..., description="Identifier of the owning category")
    description: str | None = None
    images: list[str] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    """Partial payload merged into an existing product."""

    model_config = ConfigDict(extra="allow")

    title: str | None = None
    price: float | None = Field(None, ge=0)
    category: str | None = None
    description: str | None = None
    images: list[str] | None = None

    @field_validator("title", "price", "category", "images")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        # Omitted fields keep their default and never reach this validator
        if value is None:
            raise ValueError("field may be omitted but not set to null")
        return value


class Product(BaseModel):
    """Stored product as returned by the API.

    Documents written outside this service may lack any field but ``id``.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Identifier generated by the store")
    title: str | None = None
    price: float | None = None
    category: str | None = None
    description: str | None = None
    images: list[str] | None = Field(default_factory=list)


class ProductListQuery(BaseModel):
    """Normalized listing parameters. ``None`` bounds mean unbounded."""

    limit: int | None = Field(None, ge=0, le=MAX_PAGE_VALUE)
    offset: int = Field(0, ge=0, le=MAX_PAGE_VALUE)
    search_query: str = ""
    min_price: float | None = 0
    max_price: float | None = None
    category_id: str | None = None


class ProductListResponse(BaseModel):
    """Envelope returned by listing and search endpoints."""

    totalProduct: int = Field(
        ...,
        description="Number of matching products before pagination",
    )
    products: list[Product] = Field(default_factory=list)
