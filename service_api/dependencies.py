"""
Service API — FastAPI Dependencies
===================================

What:  Accessors for the per-process collaborators built by create_app().
How:   create_app() stores the HeaderSelector and HelloWorldService on
       app.state; these functions read them back for route handlers. Tests
       replace them through app.dependency_overrides.
"""

from fastapi import Request

from service_api.headers import HeaderSelector
from service_api.services.hello_world_service import HelloWorldService


def get_header_selector(request: Request) -> HeaderSelector:
    return request.app.state.header_selector


def get_hello_world_service(request: Request) -> HelloWorldService:
    return request.app.state.hello_world_service
