"""Error handling tests."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from contact_api.exceptions import (
    ContactAPIError,
    ServiceUnavailableError,
    ValidationError,
)
from contact_api.handlers.exception_handler import (
    contact_api_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)


@pytest.fixture
def mock_request() -> MagicMock:
    """Create mock request with correlation ID."""
    request = MagicMock(spec=Request)
    request.state.correlation_id = "test-correlation-id"
    request.method = "POST"
    request.url.path = "/api/contact"
    return request


@pytest.mark.asyncio
async def test_unknown_route_returns_404(api_client) -> None:
    """Test the catch-all not-found response."""
    response = await api_client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Endpoint not found"}


@pytest.mark.asyncio
async def test_root_is_not_an_endpoint(api_client) -> None:
    """Test that only /api routes exist."""
    response = await api_client.post("/", json={})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_error_responses_carry_correlation_id(api_client) -> None:
    """Test that X-Request-ID is echoed on error responses."""
    response = await api_client.get(
        "/nowhere", headers={"X-Request-ID": "req-123"}
    )

    assert response.status_code == 404
    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_contact_api_error_rendered(mock_request) -> None:
    """Test that taxonomy errors render as success=false bodies."""
    response = await contact_api_exception_handler(
        mock_request, ServiceUnavailableError()
    )

    assert response.status_code == 503
    assert json.loads(response.body) == {
        "success": False,
        "message": "Database connection unavailable",
    }


@pytest.mark.asyncio
async def test_error_code_not_exposed(mock_request) -> None:
    """Test that machine error codes stay server-side."""
    response = await contact_api_exception_handler(
        mock_request, ValidationError("Invalid email format")
    )

    body = json.loads(response.body)
    assert "error_code" not in body
    assert "VALIDATION_ERROR" not in response.body.decode()


@pytest.mark.asyncio
async def test_http_exception_405_keeps_allow_header(mock_request) -> None:
    """Test that the Allow header survives 405 translation."""
    response = await http_exception_handler(
        mock_request, StarletteHTTPException(405, headers={"Allow": "POST"})
    )

    assert response.status_code == 405
    assert response.headers["Allow"] == "POST"
    assert json.loads(response.body)["message"] == "Method Not Allowed"


@pytest.mark.asyncio
async def test_http_exception_other_status_passthrough(mock_request) -> None:
    """Test that other HTTP errors keep their status and detail."""
    response = await http_exception_handler(
        mock_request, StarletteHTTPException(418, detail="I'm a teapot")
    )

    assert response.status_code == 418
    assert json.loads(response.body) == {"success": False, "message": "I'm a teapot"}


@pytest.mark.asyncio
async def test_validation_handler_invalid_json(mock_request) -> None:
    """Test malformed JSON body message."""
    exc = RequestValidationError(
        errors=[{"loc": ("body", 14), "msg": "JSON decode error", "type": "json_invalid"}]
    )

    response = await validation_exception_handler(mock_request, exc)

    assert response.status_code == 400
    assert json.loads(response.body)["message"] == "Invalid request body"


@pytest.mark.asyncio
async def test_validation_handler_missing_body(mock_request) -> None:
    """Test missing body message."""
    exc = RequestValidationError(
        errors=[{"loc": ("body",), "msg": "Field required", "type": "missing"}]
    )

    response = await validation_exception_handler(mock_request, exc)

    assert response.status_code == 400
    assert json.loads(response.body)["message"] == "All fields are required"


@pytest.mark.asyncio
async def test_generic_exception_hides_details(mock_request) -> None:
    """Test that unexpected errors return the generic 500 body."""
    response = await generic_exception_handler(
        mock_request, RuntimeError("password=hunter2 host=10.0.0.5")
    )

    assert response.status_code == 500
    assert json.loads(response.body) == {
        "success": False,
        "message": "Server error. Please try again later.",
    }
    assert "hunter2" not in response.body.decode()


def test_exception_defaults() -> None:
    """Test status codes and messages of the error taxonomy."""
    error = ContactAPIError("boom")

    assert error.status_code == 500
    assert error.error_code == "INTERNAL_ERROR"
    assert ValidationError().message == "All fields are required"
    assert ServiceUnavailableError().status_code == 503
