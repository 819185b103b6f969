"""Tests for error handling"""
import json

import pytest
from unittest.mock import Mock, patch
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from resource_service.core.errors import (
    ChannelFailure,
    ConflictError,
    ErrorResponse,
    HandlerFailure,
    NotFoundError,
    StoreUnavailableError,
    error_response_handler,
    http_exception_handler,
    unhandled_exception_handler,
)


def make_request(path="/api/resources/123", method="GET"):
    request = Mock()
    request.url.path = path
    request.method = method
    return request


class TestErrorResponse:
    """Test ErrorResponse exception classes"""

    def test_error_response_creation(self):
        error = ErrorResponse("Something went wrong", status_code=400)
        assert error.message == "Something went wrong"
        assert error.status_code == 400
        assert error.details == {}
        assert str(error) == "Something went wrong"

    def test_error_response_default_status_code(self):
        assert ErrorResponse("Bad request").status_code == 400

    def test_not_found_error(self):
        error = NotFoundError("Resource", "id", "123")

        assert error.status_code == 404
        assert error.message == "Resource not found with id: '123'"
        assert error.details == {"resource": "Resource", "field": "id", "value": "123"}

    def test_status_codes(self):
        assert ConflictError("dup").status_code == 409
        assert StoreUnavailableError("down").status_code == 503
        assert ChannelFailure("broker").status_code == 502

    def test_handler_failure_is_channel_failure(self):
        error = HandlerFailure("could not handle")

        assert isinstance(error, ChannelFailure)
        assert isinstance(error, ErrorResponse)


class TestErrorHandlers:
    """Test error handler functions"""

    @pytest.mark.asyncio
    async def test_error_response_handler(self):
        error = NotFoundError("Resource", "id", "123")

        with patch('resource_service.core.errors.logger') as mock_logger:
            response = await error_response_handler(make_request(), error)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 404
        body = json.loads(response.body)
        assert body["status"] == 404
        assert body["error"] == "Resource Not Found"
        assert body["path"] == "/api/resources/123"
        assert body["details"]["value"] == "123"
        mock_logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_server_errors_log_at_error_level(self):
        with patch('resource_service.core.errors.logger') as mock_logger:
            response = await error_response_handler(make_request(), StoreUnavailableError("down"))

        assert response.status_code == 503
        mock_logger.error.assert_called_once()
        assert "details" not in json.loads(response.body)

    @pytest.mark.asyncio
    async def test_http_exception_handler(self):
        exception = HTTPException(status_code=405, detail="Method Not Allowed")

        with patch('resource_service.core.errors.logger'):
            response = await http_exception_handler(make_request(), exception)

        assert response.status_code == 405
        assert json.loads(response.body)["message"] == "Method Not Allowed"

    @pytest.mark.asyncio
    async def test_unhandled_exception_handler_hides_details(self):
        with patch('resource_service.core.errors.logger') as mock_logger:
            response = await unhandled_exception_handler(make_request(), RuntimeError("secret"))

        assert response.status_code == 500
        assert "secret" not in response.body.decode()
        mock_logger.error.assert_called_once()
