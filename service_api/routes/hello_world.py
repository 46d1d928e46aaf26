"""
Service API — Hello World Route Handlers
=========================================

What:  GET /hello, POST /hello/{pathParam} and GET /hello/with-call.
How:   Extracts parameters, delegates to HelloWorldService, returns the
       response schema. Errors are raised, never formatted here.

Request Flow (GET /hello/with-call):
    1. HeaderSelector picks the platform (+ configured extra) headers
    2. HelloWorldService fetches the book list with those headers
    3. 200 with "Hello world! Book list: book1, book2"
    On failure: AppErrors propagate (500/1002 for a failed books call);
    anything else is wrapped as InternalServerError(1000, <message>).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request

from service_api.dependencies import get_header_selector, get_hello_world_service
from service_api.exceptions import AppError, GENERIC_ERROR_CODE, InternalServerError
from service_api.headers import HeaderSelector
from service_api.schemas.common import ErrorResponse
from service_api.schemas.hello_world import HelloWorldRequestBody, HelloWorldResponse
from service_api.services.hello_world_service import HelloWorldService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hello", tags=["Hello world"])

QUERY_PARAM_DESCRIPTION = "Optional value echoed back as query_param"


@router.get(
    "",
    response_model=HelloWorldResponse,
    summary="Say hello",
    description="Returns a static greeting and echoes the query parameter.",
)
async def hello_get(
    query_param: Optional[str] = Query(
        default=None, alias="queryParam", description=QUERY_PARAM_DESCRIPTION
    ),
    service: HelloWorldService = Depends(get_hello_world_service),
) -> HelloWorldResponse:
    return service.hello_get(query_param)


@router.get(
    "/with-call",
    response_model=HelloWorldResponse,
    responses={
        500: {"description": "The books service call failed", "model": ErrorResponse},
    },
    summary="Say hello with the book list",
    description=(
        "Calls the CRUD service forwarding the platform headers and returns a "
        "greeting that lists the book identifiers."
    ),
)
async def hello_with_call(
    request: Request,
    query_param: Optional[str] = Query(
        default=None, alias="queryParam", description=QUERY_PARAM_DESCRIPTION
    ),
    selector: HeaderSelector = Depends(get_header_selector),
    service: HelloWorldService = Depends(get_hello_world_service),
) -> HelloWorldResponse:
    headers = selector.select(request.headers)
    logger.debug("Forwarding headers to books call: %s", sorted(headers))

    try:
        return await service.hello_with_call(query_param, headers)
    except AppError:
        raise
    except Exception as exc:
        raise InternalServerError(code=GENERIC_ERROR_CODE, message=str(exc) or "Generic error") from exc


@router.post(
    "/{pathParam}",
    response_model=HelloWorldResponse,
    responses={
        400: {"description": "Missing or malformed name/surname", "model": ErrorResponse},
    },
    summary="Say hello to someone",
    description="Greets the person in the body and echoes the path parameter.",
)
async def hello_post(
    body: HelloWorldRequestBody,
    path_param: str = Path(alias="pathParam", description="Value echoed back as path_param"),
    service: HelloWorldService = Depends(get_hello_world_service),
) -> HelloWorldResponse:
    return service.hello_post(path_param, body)
