"""
Service API — Hello World Request/Response Schemas
===================================================

What:  Pydantic models defining the contract of the /hello endpoints.
How:   FastAPI uses these models to serialize responses and generate the
       OpenAPI document. FastAPI validates the POST body against
       HelloWorldRequestBody and raises RequestValidationError on a mismatch,
       which the error mapper turns into 400/1000.

Wire format:
    Keys are snake_case and null values are serialized, e.g.

        {
            "path_param": null,
            "query_param": "param",
            "hello_world": "Hello world!",
            "local_date": "2024-01-15",
            "instant": "2024-01-15T12:00:00.000Z"
        }
"""

from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_serializer


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HelloWorldRequestBody(BaseModel):
    """
    What:  JSON body of POST /hello/{pathParam}.
    Both fields are required and must be strings; anything else is a 400.
    """
    name: str = Field(description="First name to greet")
    surname: str = Field(description="Surname to greet")

    model_config = {"strict": True}


class HelloWorldResponse(BaseModel):
    """
    What:  Response of every /hello endpoint.
    Who:   Built by HelloWorldService; serialized as-is by FastAPI.

    local_date and instant are stamped when the response is created.
    """
    path_param: Optional[str] = Field(default=None, description="Echo of the path parameter")
    query_param: Optional[str] = Field(default=None, description="Echo of the query parameter")
    hello_world: Optional[str] = Field(default=None, description="The greeting")
    local_date: date = Field(default_factory=date.today, description="Server date (YYYY-MM-DD)")
    instant: datetime = Field(default_factory=_utc_now, description="Creation time (UTC, ms precision)")

    @field_serializer("local_date")
    def serialize_local_date(self, value: date) -> str:
        return value.strftime("%Y-%m-%d")

    @field_serializer("instant")
    def serialize_instant(self, value: datetime) -> str:
        utc = value.astimezone(timezone.utc)
        return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
