"""
Service API — Documentation Routes
===================================

What:  GET /documentation redirects to the Swagger UI; the OpenAPI document
       itself is served by FastAPI at /documentation/openapi.json
       (configured in create_app()).
"""

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

router = APIRouter(tags=["Documentation"], include_in_schema=False)


@router.get("/documentation")
async def documentation(request: Request) -> RedirectResponse:
    return RedirectResponse(url=request.app.docs_url, status_code=301)
