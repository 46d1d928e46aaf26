"""
Service API — Request Logging Middleware
=========================================

What:  Start/end access log lines for every HTTP request.
How:   Logs "[HTTP REQUEST - START]" on arrival and "[HTTP REQUEST - END]" on
       completion with status and duration. Both lines carry the request id
       and platform identity fields (from RequestContextMiddleware) as
       `extra` attributes for structured log handlers.
When:  Runs inside RequestContextMiddleware, so the context is already set.

Health probes (paths under /-/) are not logged: orchestrators call them every
few seconds.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from service_api.error_mapper import map_error
from service_api.middleware.request_context import platform_context_var, request_id_var

logger = logging.getLogger("service_api.access")

HEALTH_PATH_PREFIX = "/-/"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, URL, status, duration and identity fields per request.

    Log level follows the status class:
        5xx → ERROR, 4xx → WARNING, everything else → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path.startswith(HEALTH_PATH_PREFIX):
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method
        url = str(request.url)
        context = {"request_id": request_id_var.get(""), **platform_context_var.get()}

        logger.info(
            "[HTTP REQUEST - START] %s - %s",
            method,
            path,
            extra={"method": method, "url": url, **context},
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            # RequestContextMiddleware renders the response for this fault
            status, _ = map_error(exc)
            self._log_end(status, method, path, url, start_time, context)
            raise

        self._log_end(response.status_code, method, path, url, start_time, context)
        return response

    @staticmethod
    def _log_end(status, method, path, url, start_time, context) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "[HTTP REQUEST - END] %d: %s - %s %.1fms",
            status,
            method,
            path,
            duration_ms,
            extra={
                "method": method,
                "url": url,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                **context,
            },
        )
