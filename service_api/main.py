"""
Service API — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the collaborators from a Settings
       object, wires middleware, exception handlers and routers, and returns
       the app.
Who:   Called by uvicorn to start the server (uvicorn service_api.main:app)
       and by the tests, which build apps with their own settings/clients.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────────────┐ ┌──────────────────┐               │
    │  │ Request Context  │→│ Request Logging  │               │
    │  └──────────────────┘ └──────────────────┘               │
    │                                                          │
    │  Routes:                                                 │
    │  ┌────────────┐ ┌─────────────┐ ┌──────────────────────┐ │
    │  │ /hello...  │ │ /-/healthz… │ │ /documentation…      │ │
    │  └────────────┘ └─────────────┘ └──────────────────────┘ │
    │                                                          │
    │  Exception Handlers → error_mapper.map_error():          │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ AppError │ HTTPException │ Validation │ Exception  │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the resolved configuration
    Shutdown: close the CRUD client's connection pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from service_api import __version__
from service_api.clients.crud_client import CrudClient
from service_api.config import Settings, settings
from service_api.error_mapper import error_response
from service_api.exceptions import AppError
from service_api.headers import HeaderSelector
from service_api.middleware.logging import RequestLoggingMiddleware
from service_api.middleware.request_context import RequestContextMiddleware, request_id_var
from service_api.routes import documentation, health, hello_world
from service_api.schemas.common import ErrorResponse
from service_api.services.hello_world_service import HelloWorldService
from service_api.status import build_health_status

logger = logging.getLogger(__name__)

DOCS_URL = "/swagger-ui"
OPENAPI_URL = "/documentation/openapi.json"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    The access middleware also attaches request_id, user_id, status and
    duration_ms as record attributes, so a JSON formatter can be dropped in
    without touching the call sites.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings

    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("%s %s starting up...", app_settings.service_name, app.state.health_status.version)
    logger.info("CRUD service: %s (http log level %s)", app_settings.crud_service_url, app_settings.http_log_level)
    logger.info("Forwarded headers: %s", ", ".join(app.state.header_selector.header_names))
    logger.info("API docs: http://%s:%d%s", app_settings.backend_host, app_settings.backend_port, DOCS_URL)
    logger.info("=" * 60)

    yield

    logger.info("%s shutting down...", app_settings.service_name)
    await app.state.crud_client.aclose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Route every error raised while handling a request through map_error().

    Handlers never expose stack traces; unexpected faults are logged
    server-side with exc_info.
    """

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        rid = request_id_var.get("")
        log_level = logging.ERROR if exc.__cause__ is not None else logging.WARNING
        logger.log(log_level, "[%s] %r", rid, exc)
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        rid = request_id_var.get("")
        logger.warning("[%s] HTTP %d on %s: %s", rid, exc.status_code, request.url.path, exc.detail)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Request validation error: %s", rid, exc.errors())
        return error_response(exc)

    @app.exception_handler(PydanticValidationError)
    async def handle_pydantic_validation_error(request: Request, exc: PydanticValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.errors())
        return error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=exc)
        return error_response(exc)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    crud_client: Optional[CrudClient] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Configuration; defaults to the process-wide settings.
        crud_client: Downstream client; built from app_settings when omitted.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Service API",
        description="Hello world microservice template with header forwarding to the CRUD service.",
        version=__version__,
        contact={"name": "Platform team", "email": "contact@email.com"},
        docs_url=DOCS_URL,
        redoc_url=None,
        openapi_url=OPENAPI_URL,
        lifespan=lifespan,
        responses={
            500: {"description": "Unexpected server error", "model": ErrorResponse},
        },
    )

    # ── Collaborators ─────────────────────────────────────────────────────
    crud_client = crud_client or CrudClient(
        base_url=app_settings.crud_service_url,
        timeout=app_settings.http_timeout,
        log_level=app_settings.http_log_level,
    )
    app.state.settings = app_settings
    app.state.crud_client = crud_client
    app.state.header_selector = HeaderSelector(
        additional_headers=app_settings.additional_headers_to_proxy,
        base_headers=app_settings.platform_headers,
    )
    app.state.hello_world_service = HelloWorldService(crud_client)
    app.state.health_status = build_health_status(app_settings.service_name)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestContext → RequestLogging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        RequestContextMiddleware,
        header_keys={
            "user_id": app_settings.userid_header_key,
            "user_groups": app_settings.groups_header_key,
            "client_type": app_settings.clienttype_header_key,
            "is_backoffice": app_settings.backoffice_header_key,
            "user_properties": app_settings.user_properties_header_key,
        },
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(hello_world.router)
    app.include_router(health.router)
    app.include_router(documentation.router)

    return app


# uvicorn expects `service_api.main:app` to be importable
app = create_app()
