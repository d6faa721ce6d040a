"""Error kinds raised by the product access layer."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    MALFORMED_IDENTIFIER = "malformed_identifier"
    INTERNAL = "internal"


class ProductAccessError(Exception):
    """Base error carrying the kind the API layer dispatches on."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProductNotFoundError(ProductAccessError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class MalformedIdentifierError(ProductAccessError):
    kind = ErrorKind.MALFORMED_IDENTIFIER

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Malformed product id: {product_id!r}")
        self.product_id = product_id


class ProductStoreError(ProductAccessError):
    """Any failure of the underlying store."""

    kind = ErrorKind.INTERNAL
