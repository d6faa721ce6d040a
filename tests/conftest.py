"""Pytest configuration and fixtures for the products API."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from src.services.products.dependency import get_product_repository
from src.services.products.memory_repository import InMemoryProductRepository
from src.services.products.mongo_repository import MongoProductRepository


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


@pytest.fixture()
def product_repository():
    """Serve the API from a fresh in-memory product store."""
    from src.main import app

    repository = InMemoryProductRepository()
    app.dependency_overrides[get_product_repository] = lambda: repository
    yield repository
    repository.clear()
    app.dependency_overrides.pop(get_product_repository, None)


@pytest_asyncio.fixture()
async def mongo_repository():
    """Provide a Mongo product store backed by mongomock."""
    client = AsyncMongoMockClient()
    collection = client["test_shop"]["products"]
    try:
        yield MongoProductRepository(collection)
    finally:
        await collection.drop()


@pytest_asyncio.fixture()
async def client(product_repository):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from src.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client


@pytest.fixture()
def seed_products(client):
    """Create products through the API and return the created bodies."""

    async def _seed(products: list[dict]) -> list[dict]:
        created = []
        for payload in products:
            response = await client.post("/products", json=payload)
            assert response.status_code == 201
            created.append(response.json())
        return created

    return _seed
