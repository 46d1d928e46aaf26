"""
Service API — Hello World Service Unit Tests
=============================================

What:  Tests for HelloWorldService with a mocked CRUD client (no HTTP).

What we test:
    ✅ Books are returned as-is and the headers are passed through
    ✅ Any downstream failure becomes InternalServerError(1002)
    ✅ Greetings are assembled from the inputs
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from service_api.exceptions import InternalServerError
from service_api.schemas.hello_world import HelloWorldRequestBody
from service_api.services.hello_world_service import HelloWorldService


class TestGetBooksByHeaders:

    def setup_method(self):
        self.crud = AsyncMock()
        self.service = HelloWorldService(self.crud)

    @pytest.mark.asyncio
    async def test_returns_books(self):
        self.crud.get_books.return_value = ["book1", "book2"]

        result = await self.service.get_books_by_headers({"miauserid": "u"})

        assert result == ["book1", "book2"]
        self.crud.get_books.assert_awaited_once_with({"miauserid": "u"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failure", [
        Exception(),
        httpx.ReadTimeout("timed out"),
        ValueError("Unexpected books payload"),
    ])
    async def test_failure_becomes_books_call_failed(self, failure):
        self.crud.get_books.side_effect = failure

        with pytest.raises(InternalServerError, match="books call failed") as exc_info:
            await self.service.get_books_by_headers({})

        assert exc_info.value.code == 1002
        assert exc_info.value.__cause__ is failure
        self.crud.get_books.assert_awaited_once_with({})


class TestGreetings:

    def setup_method(self):
        self.service = HelloWorldService(AsyncMock())

    def test_hello_get(self):
        response = self.service.hello_get("param")
        assert (response.path_param, response.query_param, response.hello_world) == (
            None, "param", "Hello world!",
        )

    def test_hello_post(self):
        body = HelloWorldRequestBody(name="John", surname="Doe")
        response = self.service.hello_post("1234", body)
        assert (response.path_param, response.query_param, response.hello_world) == (
            "1234", None, "Hello world John Doe!",
        )

    @pytest.mark.asyncio
    async def test_hello_with_call_empty_list(self):
        self.service.crud_client.get_books.return_value = []
        response = await self.service.hello_with_call(None, {})
        assert response.hello_world == "Hello world! Book list: "
