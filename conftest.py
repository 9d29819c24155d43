"""
Root conftest for the pytest test suite.

Each test that touches the database gets a fresh, isolated in-memory SQLite
database behind its own DataStore, which is the same handle the
application lifespan owns in production.

Key Fixtures:
- `anyio_backend`: Specifies the asyncio backend.
- `store`: A connected DataStore with a freshly generated schema.
- `app_for_testing`: The FastAPI app with `app.state.store` pointed at the
  test store.
- `client`: An httpx AsyncClient that drives the app through ASGITransport
  on the test's own event loop, the loop the store's connection lives on.
  The production lifespan is not run.
- `restore_logging`: Resets the "busana" logger after tests that reconfigure it.
"""

import logging
from typing import Any, AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from busana.core.database import DataStore
from busana.main import app as actual_app


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest_asyncio.fixture(scope="function")
async def store() -> AsyncGenerator[DataStore, None]:
    """
    A connected DataStore on a brand new in-memory database.

    Schemas are generated on connect and the connection is closed afterwards.
    """
    test_store = DataStore("sqlite://:memory:", generate_schemas=True)
    await test_store.connect()

    yield test_store

    await test_store.close()


@pytest.fixture(scope="function")
def app_for_testing(store: DataStore) -> Generator[FastAPI, Any, None]:
    """
    Provides the FastAPI application wired to the test `store`, which owns the
    database connection instead of the production lifespan.
    """
    actual_app.state.store = store

    yield actual_app

    del actual_app.state.store


@pytest_asyncio.fixture(scope="function")
async def client(app_for_testing: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app_for_testing)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    app_logger = logging.getLogger("busana")
    level, handlers = app_logger.level, list(app_logger.handlers)

    yield

    app_logger.handlers = handlers
    app_logger.setLevel(level)
