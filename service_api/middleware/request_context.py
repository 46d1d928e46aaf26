"""
Service API — Request Context Middleware
=========================================

What:  Captures the request id and the platform identity headers of each
       request and exposes them to loggers through context variables.
How:   Reads x-request-id (or generates a short id when absent), stores it and
       the user id / groups / client type / backoffice / user properties
       headers in ContextVars, and echoes the request id on the response. A fault
       that no exception handler caught is rendered here through
       error_mapper, so its 500 still carries the request id.
Who:   Applied to every request via Starlette middleware.

The generated id is only used for log correlation. Header forwarding works
on the inbound headers, so a generated id is never sent downstream.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from service_api.config import REQUEST_ID_HEADER
from service_api.error_mapper import error_response

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests on the same event loop get their own values
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
platform_context_var: ContextVar[Dict[str, Optional[str]]] = ContextVar("platform_context", default={})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Stores per-request identity in context variables.

    Args:
        app: The wrapped ASGI application
        header_keys: Log field name → header name, e.g.
            {"user_id": "miauserid", "user_groups": "miausergroups", ...}
    """

    def __init__(self, app: ASGIApp, header_keys: Optional[Dict[str, str]] = None):
        super().__init__(app)
        self.header_keys = dict(header_keys or {})

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        platform_context_var.set(
            {field: request.headers.get(header) for field, header in self.header_keys.items()}
        )
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("[%s] Unhandled error: %s", rid, exc, exc_info=exc)
            response = error_response(exc)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
