"""
Service API — Hello World Service
==================================

What:  Business logic behind the /hello endpoints.
How:   Builds HelloWorldResponse objects and, for /hello/with-call, fetches the
       book list from the CRUD service with the forwarded platform headers.
Who:   Created once in create_app(); injected into routes via
       get_hello_world_service.

Error Handling:
    Any failure of the downstream call (timeout, connection error, non-2xx
    status, unexpected payload) becomes
    InternalServerError(code=1002, message="books call failed").
    The original exception is chained and logged; it is never retried.
"""

import logging
from typing import List, Mapping, Optional

from service_api.clients.crud_client import CrudClient
from service_api.exceptions import BOOKS_CALL_FAILED_CODE, InternalServerError
from service_api.schemas.hello_world import HelloWorldRequestBody, HelloWorldResponse

logger = logging.getLogger(__name__)

BOOKS_CALL_FAILED_MESSAGE = "books call failed"


class HelloWorldService:
    """Greeting assembly plus the downstream books lookup."""

    def __init__(self, crud_client: CrudClient):
        self.crud_client = crud_client

    def hello_get(self, query_param: Optional[str]) -> HelloWorldResponse:
        return HelloWorldResponse(
            path_param=None,
            query_param=query_param,
            hello_world="Hello world!",
        )

    def hello_post(self, path_param: str, body: HelloWorldRequestBody) -> HelloWorldResponse:
        return HelloWorldResponse(
            path_param=path_param,
            query_param=None,
            hello_world=f"Hello world {body.name} {body.surname}!",
        )

    async def get_books_by_headers(self, headers: Mapping[str, str]) -> List[str]:
        """
        Fetch book identifiers from the CRUD service.

        Raises:
            InternalServerError: code 1002 when the downstream call fails.
        """
        try:
            return await self.crud_client.get_books(headers)
        except Exception as exc:
            logger.warning("Books call failed: %s: %s", type(exc).__name__, exc)
            raise InternalServerError(
                code=BOOKS_CALL_FAILED_CODE,
                message=BOOKS_CALL_FAILED_MESSAGE,
            ) from exc

    async def hello_with_call(
        self, query_param: Optional[str], headers: Mapping[str, str]
    ) -> HelloWorldResponse:
        books = await self.get_books_by_headers(headers)
        return HelloWorldResponse(
            path_param=None,
            query_param=query_param,
            hello_world=f"Hello world! Book list: {', '.join(books)}",
        )
