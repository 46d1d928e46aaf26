"""
Service API — Health Check Routes
==================================

What:  Liveness, readiness and check-up probes under /-/.
How:   Every probe returns the HealthResponse built once in create_app().
Who:   Called by the orchestrator (liveness/readiness) and monitoring.

The check-up probe is where dependency checks go once the service has
dependencies that must be up before it can serve traffic.
"""

from fastapi import APIRouter, Request

from service_api.schemas.common import HealthResponse

router = APIRouter(prefix="/-", tags=["Health"])


def _health_status(request: Request) -> HealthResponse:
    return request.app.state.health_status


@router.get("/healthz", response_model=HealthResponse, summary="Liveness probe")
async def healthz(request: Request) -> HealthResponse:
    return _health_status(request)


@router.get("/ready", response_model=HealthResponse, summary="Readiness probe")
async def ready(request: Request) -> HealthResponse:
    return _health_status(request)


@router.get("/check-up", response_model=HealthResponse, summary="Dependencies check-up")
async def check_up(request: Request) -> HealthResponse:
    return _health_status(request)
