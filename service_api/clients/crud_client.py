"""
Service API — CRUD Service Client
==================================

What:  Async client for the platform CRUD service ("books" collection).
How:   Wraps a long-lived httpx.AsyncClient with a fixed base URL, a 60 second
       connect/read/write/pool timeout, and optional request/response logging
       implemented as httpx event hooks.
Who:   Created once in create_app(); used by HelloWorldService.
When:  One GET per /hello/with-call request. Calls are never retried.

HTTP log levels (HTTP_LOG_LEVEL):
    NONE     nothing
    BASIC    request line, response status and duration
    HEADERS  BASIC + request and response headers
    BODY     HEADERS + response body
"""

import logging
import time
from typing import Any, List, Mapping, Optional

import httpx

logger = logging.getLogger(__name__)

BOOKS_PATH = "books/"

HTTP_LOG_LEVELS = ("NONE", "BASIC", "HEADERS", "BODY")


class CrudClient:
    """
    Client of the CRUD service's books collection.

    Args:
        base_url: Root URL of the CRUD service (e.g. http://crud-service/)
        timeout: Seconds allowed for connect, read, write and pool acquisition
        log_level: One of HTTP_LOG_LEVELS
        transport: Optional httpx transport, used by tests (httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        log_level: str = "NONE",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.log_level = log_level.upper() if log_level.upper() in HTTP_LOG_LEVELS else "NONE"

        event_hooks = {}
        if self.log_level != "NONE":
            event_hooks = {
                "request": [self._log_request],
                "response": [self._log_response],
            }

        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            event_hooks=event_hooks,
            transport=transport,
        )

    # ── Logging hooks ─────────────────────────────────────────────────────

    async def _log_request(self, request: httpx.Request) -> None:
        request.extensions["crud_client_start"] = time.perf_counter()
        logger.info("--> %s %s", request.method, request.url)
        if self.log_level in ("HEADERS", "BODY"):
            for name, value in request.headers.items():
                logger.info("%s: %s", name, value)

    async def _log_response(self, response: httpx.Response) -> None:
        request = response.request
        start = request.extensions.get("crud_client_start")
        duration_ms = (time.perf_counter() - start) * 1000 if start else 0.0
        logger.info(
            "<-- %d %s %s (%.1fms)",
            response.status_code,
            request.method,
            request.url,
            duration_ms,
        )
        if self.log_level in ("HEADERS", "BODY"):
            for name, value in response.headers.items():
                logger.info("%s: %s", name, value)
        if self.log_level == "BODY":
            await response.aread()
            logger.info("%s", response.text)

    # ── Operations ────────────────────────────────────────────────────────

    async def get_books(self, headers: Mapping[str, str]) -> List[str]:
        """
        Fetch the list of book identifiers.

        Args:
            headers: Headers to forward (already filtered by HeaderSelector).

        Returns:
            The book identifiers as returned by the CRUD service.

        Raises:
            httpx.HTTPError: Connection failure, timeout or non-2xx status.
            ValueError: The response body is not a JSON list of strings.
        """
        response = await self._client.get(BOOKS_PATH, headers=dict(headers))
        response.raise_for_status()

        payload: Any = response.json()
        if not isinstance(payload, list) or not all(isinstance(book, str) for book in payload):
            raise ValueError("Unexpected books payload: expected a JSON list of strings")
        return payload

    async def aclose(self) -> None:
        """Close pooled connections. Called on application shutdown."""
        await self._client.aclose()
