"""
Service API — Error Mapper Unit Tests
======================================

What:  Tests for map_error() (exception → status code + {code, message}).

What we test:
    ✅ Every AppError kind keeps its own code and message
    ✅ Framework 404/400 and other HTTP errors use code 1000
    ✅ Body validation errors (missing field, wrong type) → 400/1000
    ✅ Exception groups → 400 with the inner message
    ✅ Uncaught faults → 500/1000, "Generic error" when there is no message
    ✅ The mapper never raises
"""

import pytest
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.exceptions import HTTPException

from service_api.error_mapper import GENERIC_ERROR_MESSAGE, format_validation_errors, map_error
from service_api.exceptions import (
    AppError,
    BadRequestError,
    ErrorKind,
    InternalServerError,
    NotFoundError,
    UnauthorizedError,
)
from service_api.schemas.hello_world import HelloWorldRequestBody


class TestAppErrors:

    def test_unauthorized(self):
        status, body = map_error(UnauthorizedError(code=42, message="nope"))
        assert status == 401
        assert body.model_dump() == {"code": 42, "message": "nope"}

    def test_not_found(self):
        status, body = map_error(NotFoundError(code=7, message="book not found"))
        assert status == 404
        assert body.model_dump() == {"code": 7, "message": "book not found"}

    def test_bad_request(self):
        status, body = map_error(BadRequestError(code=12, message="bad input"))
        assert status == 400
        assert body.model_dump() == {"code": 12, "message": "bad input"}

    def test_internal_server_error(self):
        status, body = map_error(InternalServerError(code=1002, message="books call failed"))
        assert status == 500
        assert body.model_dump() == {"code": 1002, "message": "books call failed"}

    def test_kind_tag_on_base_class(self):
        status, body = map_error(AppError(code=3, message="denied", kind=ErrorKind.UNAUTHORIZED))
        assert status == 401
        assert body.code == 3

    def test_uncoded_app_error_defaults_to_1000(self):
        status, body = map_error(BadRequestError(message="bad input"))
        assert status == 400
        assert body.code == 1000

    def test_empty_message_falls_back_to_generic(self):
        _, body = map_error(InternalServerError(code=5, message=""))
        assert body.message == GENERIC_ERROR_MESSAGE


class TestFrameworkErrors:

    def test_no_matching_route(self):
        status, body = map_error(HTTPException(status_code=404))
        assert status == 404
        assert body.model_dump() == {"code": 1000, "message": "Not Found"}

    def test_malformed_request(self):
        status, body = map_error(HTTPException(status_code=400, detail="Malformed request"))
        assert status == 400
        assert body.model_dump() == {"code": 1000, "message": "Malformed request"}

    def test_other_http_errors_keep_their_status(self):
        status, body = map_error(HTTPException(status_code=405))
        assert status == 405
        assert body.model_dump() == {"code": 1000, "message": "Method Not Allowed"}


class TestValidationErrors:

    def test_missing_required_field(self):
        with pytest.raises(ValidationError) as exc_info:
            HelloWorldRequestBody.model_validate({"name": "John"})

        status, body = map_error(exc_info.value)
        assert status == 400
        assert body.code == 1000
        assert "surname" in body.message

    def test_wrong_json_type(self):
        with pytest.raises(ValidationError) as exc_info:
            HelloWorldRequestBody.model_validate({"name": 12, "surname": "Doe"})

        status, body = map_error(exc_info.value)
        assert status == 400
        assert body.code == 1000
        assert "name" in body.message

    def test_request_validation_error(self):
        exc = RequestValidationError([
            {"type": "missing", "loc": ("body", "surname"), "msg": "Field required", "input": {}},
        ])
        status, body = map_error(exc)
        assert status == 400
        assert body.model_dump() == {"code": 1000, "message": "Field required for property 'body.surname'"}

    def test_format_joins_multiple_errors(self):
        message = format_validation_errors([
            {"loc": ("body", "name"), "msg": "Field required"},
            {"loc": (), "msg": "JSON decode error"},
        ])
        assert message == "Field required for property 'body.name'; JSON decode error"


class TestWrappedAndGenericFaults:

    def test_exception_group_uses_inner_message(self):
        status, body = map_error(ExceptionGroup("handler failed", [ValueError("inner boom")]))
        assert status == 400
        assert body.model_dump() == {"code": 1000, "message": "inner boom"}

    def test_generic_fault_with_message(self):
        status, body = map_error(RuntimeError("some error occurred"))
        assert status == 500
        assert body.model_dump() == {"code": 1000, "message": "some error occurred"}

    def test_generic_fault_without_message(self):
        status, body = map_error(RuntimeError())
        assert status == 500
        assert body.model_dump() == {"code": 1000, "message": "Generic error"}

    def test_unreadable_message_falls_back(self):
        class UnprintableError(Exception):
            def __str__(self):
                raise RuntimeError("cannot render")

        status, body = map_error(UnprintableError())
        assert status == 500
        assert body.model_dump() == {"code": 1000, "message": "Generic error"}

    def test_mapping_is_stateless(self):
        first = map_error(UnauthorizedError(code=42, message="nope"))
        map_error(RuntimeError("other"))
        assert map_error(UnauthorizedError(code=42, message="nope")) == first
