"""
Service API — Shared Response Schemas
======================================

What:  Error and health payloads shared by every router.
Why:   Clients get one error shape, `{code, message}`, from every endpoint;
       the same model documents the error responses in the OpenAPI document.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Body of every error response produced by the error mapper.

    Example:
        {"code": 1002, "message": "books call failed"}
    """
    code: int = Field(description="Application error code (1000 for uncoded faults)")
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Body of the /-/healthz, /-/ready and /-/check-up probes.
    Built once at app creation and reused for every probe.
    """
    name: str = Field(description="Service name")
    version: str = Field(description="Service version")
    status: str = Field(default="OK", description="Always OK while the process serves traffic")

    model_config = {"frozen": True}
