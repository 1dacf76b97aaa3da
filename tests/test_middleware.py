"""
Tests for the request validation middleware and its settings.
"""

import asyncio
import logging
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from req_validator import (
    ParameterSchema,
    PatternMismatchError,
    RequestValidator,
    SchemaError,
    TypeMismatchError,
    ValidatorSettings,
    parse_validator_settings,
    req_validator,
)

SCHEMA = {
    "id": {"type": "number", "location": "params.id"},
    "verbose": {"type": "boolean", "location": "query.verbose", "default": False},
    "token": {"type": "string", "location": "headers.token", "regex": "^tk-", "dto": False},
}


def _request(**parts):
    base = {"params": {}, "query": {}, "headers": {"token": "tk-1"}, "body": None}
    base.update(parts)
    return SimpleNamespace(**base)


class TestRequestValidator:
    """Tests for the synchronous middleware call."""

    def test_success_attaches_dto_and_calls_next(self):
        validator = RequestValidator(SCHEMA)
        request = _request(params={"id": "12"})

        response = validator(request, lambda req: {"status": 200, "body": req.dto})

        assert request.dto == {"id": 12, "verbose": False}
        assert response == {"status": 200, "body": {"id": 12, "verbose": False}}

    def test_mapping_request_gets_key(self):
        validator = RequestValidator({"q": {"type": "string", "location": "query.q"}})
        request = {"query": {"q": "term"}}
        validator(request, lambda req: None)
        assert request["dto"] == {"q": "term"}

    def test_custom_context_key(self):
        validator = req_validator(SCHEMA, context_key="params_out")
        request = _request(params={"id": 1})
        validator(request, lambda req: None)
        assert request.params_out["id"] == 1

    def test_failure_default_response(self, caplog):
        validator = RequestValidator(SCHEMA)
        called = []

        with caplog.at_level(logging.ERROR, logger="req_validator.middleware"):
            response = validator(_request(params={"id": "x"}), called.append)

        assert called == []
        assert response["status"] == 400
        assert response["body"]["success"] is False
        assert response["body"]["error"]["path"] == "params.id"
        assert response["headers"] == {}
        assert "Invalid type in params.id, expected number" in caplog.text

    def test_failure_does_not_attach_dto(self):
        validator = RequestValidator(SCHEMA)
        request = _request(params={"id": "x"})
        validator(request, lambda req: None)
        assert not hasattr(request, "dto")

    def test_failure_uses_error_handler(self):
        seen = []

        def on_error(error, request):
            seen.append((error, request))
            return "handled"

        validator = RequestValidator(SCHEMA, error_handler=on_error)
        request = _request(params={"id": 1}, headers={"token": "bad"})

        assert validator(request, lambda req: "next") == "handled"
        assert isinstance(seen[0][0], PatternMismatchError)
        assert seen[0][1] is request

    def test_logging_disabled(self, caplog):
        validator = RequestValidator(SCHEMA, settings=ValidatorSettings(log_errors=False))
        with caplog.at_level(logging.ERROR, logger="req_validator.middleware"):
            validator(_request(), lambda req: None)
        assert caplog.records == []

    def test_custom_status(self):
        validator = req_validator(SCHEMA, default_status=422)
        response = validator(_request(), lambda req: None)
        assert response["status"] == 422

    def test_validate_returns_result(self):
        validator = RequestValidator(SCHEMA)
        result = validator.validate(_request())
        assert result.success is False
        assert isinstance(result.error, TypeMismatchError)

    def test_schema_parsed_once(self):
        validator = RequestValidator(SCHEMA)
        assert isinstance(validator.schema, ParameterSchema)

    def test_bad_schema_fails_at_construction(self):
        with pytest.raises(SchemaError):
            RequestValidator({"id": {"type": "integer"}})


class TestAsyncDispatch:
    """Tests for the async middleware entry point."""

    def test_dispatch_success(self):
        validator = RequestValidator(SCHEMA)
        request = _request(params={"id": "5"})

        async def call_next(req):
            return req.dto["id"]

        assert asyncio.run(validator.dispatch(request, call_next)) == 5

    def test_dispatch_awaits_async_error_handler(self):
        async def on_error(error, request):
            return error.path

        async def call_next(req):
            return "next"

        validator = RequestValidator(SCHEMA, error_handler=on_error)
        result = asyncio.run(validator.dispatch(_request(), call_next))
        assert result == "params.id"

    def test_dispatch_default_response(self):
        async def call_next(req):
            return "next"

        validator = RequestValidator(SCHEMA, settings=ValidatorSettings(log_errors=False))
        response = asyncio.run(validator.dispatch(_request(), call_next))
        assert response["status"] == 400


class TestValidatorSettings:
    """Tests for middleware settings."""

    def test_defaults(self):
        settings = ValidatorSettings()
        assert settings.context_key == "dto"
        assert settings.default_status == 400
        assert settings.log_errors is True
        assert settings.log_traceback is False

    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            ValidatorSettings(default_status=200)

    def test_empty_context_key(self):
        with pytest.raises(ValidationError):
            ValidatorSettings(context_key="  ")

    def test_unknown_setting(self):
        with pytest.raises(ValidationError):
            ValidatorSettings(status=400)

    def test_parse_from_settings_section(self):
        settings = parse_validator_settings({"validation": {"context_key": "params"}})
        assert settings.context_key == "params"

    def test_parse_without_section(self):
        assert parse_validator_settings({}) == ValidatorSettings()
        assert parse_validator_settings(None) == ValidatorSettings()
