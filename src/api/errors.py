"""Translate product access errors into HTTP responses."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.services.products.errors import (
    ErrorKind,
    ProductAccessError,
    ProductStoreError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

WRONG_ID_FORMAT_MESSAGE = "wrong id format"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def _error_body(status_code: int, message: str) -> dict[str, int | str]:
    return {"statusCode": status_code, "message": message}


def error_response(error: ProductAccessError) -> JSONResponse:
    """Build the response for a product access error based on its kind."""

    match error.kind:
        case ErrorKind.NOT_FOUND:
            status_code = status.HTTP_404_NOT_FOUND
            message = error.message
        case ErrorKind.MALFORMED_IDENTIFIER:
            status_code = status.HTTP_404_NOT_FOUND
            message = WRONG_ID_FORMAT_MESSAGE
        case ErrorKind.INTERNAL:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            message = INTERNAL_ERROR_MESSAGE
        case _:
            raise ValueError(f"Unhandled error kind: {error.kind}")

    return JSONResponse(status_code=status_code, content=_error_body(status_code, message))


async def product_access_error_handler(
    request: Request, error: ProductAccessError
) -> JSONResponse:
    if error.kind is ErrorKind.INTERNAL:
        logger.error(
            "Product request failed: %s %s: %s",
            request.method,
            request.url.path,
            error.message,
            exc_info=error,
        )
    else:
        logger.info(
            "Product request rejected (%s): %s", error.kind.value, error.message
        )
    return error_response(error)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the product error translator on the application."""

    app.add_exception_handler(ProductAccessError, product_access_error_handler)


async def store_call(operation: Awaitable[T]) -> T:
    """Await a store operation, collapsing unknown failures into a store error."""

    try:
        return await operation
    except ProductAccessError:
        raise
    except Exception as exc:
        raise ProductStoreError(str(exc)) from exc
