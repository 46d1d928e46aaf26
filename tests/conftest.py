"""
Service API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── test_settings: Settings with one extra forwarded header
    ├── mock_crud_client: AsyncMock standing in for CrudClient
    ├── app: FastAPI app built by create_app() around the mock client
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CRUD_SERVICE_URL"] = "http://crud-service.test/"
os.environ["ADDITIONAL_HEADERS_TO_PROXY"] = ""

from service_api.clients.crud_client import CrudClient  # noqa: E402
from service_api.config import Settings  # noqa: E402
from service_api.main import create_app  # noqa: E402


@pytest.fixture
def test_settings():
    return Settings(additional_headers_to_proxy="some-other-header-to-proxy")


@pytest.fixture
def mock_crud_client():
    """
    Provides a CrudClient double.

    Usage:
        mock_crud_client.get_books.return_value = ["book1", "book2"]
        mock_crud_client.get_books.side_effect = httpx.ConnectError("down")
    """
    client = AsyncMock(spec=CrudClient)
    client.get_books = AsyncMock(return_value=[])
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def app(test_settings, mock_crud_client):
    return create_app(app_settings=test_settings, crud_client=mock_crud_client)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    raise_app_exceptions=False: Starlette re-raises uncaught faults after the
    error handler has rendered the 500 response; the test wants the response.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
