"""
Root conftest for the pytest test suite.

This file contains the main fixtures that are used across the entire test suite.

This setup uses a manual, async-native approach to database initialization
to ensure that each test runs against a fresh, isolated in-memory database,
which is the most reliable method for an async pytest environment.

Key Fixtures:
- `anyio_backend`: Specifies the asyncio backend for pytest-asyncio.
- `initialize_test_db`: (autouse) Creates a fresh DB schema for each test.
- `store`: A `ProductStore` bound to the test connection.
- `product_factory`: Creates product records with sensible defaults.
- `app_for_testing`: The FastAPI application with the store dependency
  pointed at the test database.
- `async_client`: An httpx AsyncClient talking to the app in-process.
"""

from typing import Any, AsyncGenerator, Generator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from tortoise import Tortoise

from salesboard.features.products.dependencies import get_store
from salesboard.features.products.models import ProductTransaction
from salesboard.features.products.store import ProductStore

# Import the app
from salesboard.main import app as actual_app


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """
    Specifies the asyncio backend for pytest-asyncio.
    """
    return "asyncio"


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db() -> AsyncGenerator[None, None]:
    """
    Initializes the database for each test function.

    This async, autouse fixture creates a fresh in-memory database and schema
    for each test and tears it down afterwards.
    """
    test_db_config = {
        "connections": {"default": "sqlite://:memory:"},
        "apps": {
            "models": {
                "models": ["salesboard.features.products.models"],
                "default_connection": "default",
            }
        },
    }
    await Tortoise.init(config=test_db_config)
    await Tortoise.generate_schemas()

    yield

    await Tortoise.close_connections()


@pytest.fixture(scope="function")
def store() -> ProductStore:
    return ProductStore("default")


@pytest_asyncio.fixture(scope="function")
async def product_factory():
    """A factory to create product records; ids are assigned sequentially."""
    next_id = 1

    async def _factory(
        price: float,
        date_of_sale: str,
        sold: bool = True,
        category: str = "electronics",
        title: str = "Sample product",
        description: str = "A sample product",
    ) -> ProductTransaction:
        nonlocal next_id
        record = await ProductTransaction.create(
            id=next_id,
            title=title,
            description=description,
            price=price,
            category=category,
            image=f"https://example.com/images/{next_id}.jpg",
            sold=sold,
            date_of_sale=date_of_sale,
        )
        next_id += 1
        return record

    return _factory


@pytest.fixture(scope="function")
def app_for_testing(store: ProductStore) -> Generator[FastAPI, Any, None]:
    """
    Provides the FastAPI application with the store dependency overridden,
    so the production lifespan (and its database) is never involved.
    """
    actual_app.dependency_overrides[get_store] = lambda: store

    yield actual_app

    actual_app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client(app_for_testing: FastAPI) -> AsyncGenerator[httpx.AsyncClient, Any]:
    """
    Provides an httpx AsyncClient bound to the app through ASGITransport.
    Requests run on the test's event loop, next to the in-memory database.
    """
    transport = httpx.ASGITransport(app=app_for_testing)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
