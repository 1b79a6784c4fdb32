"""Global exception handlers for consistent error responses."""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from contact_api.exceptions import (
    ContactAPIError,
    EndpointNotFoundError,
    MethodNotAllowedError,
    PersistenceError,
)
from contact_api.logging.config import get_logger

logger = get_logger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body"
MISSING_FIELDS_MESSAGE = "All fields are required"


def create_error_response(
    message: str,
    status_code: int,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """
    Create standardized error response.

    Args:
        message: Client-facing error message
        status_code: HTTP status code
        headers: Optional extra response headers

    Returns:
        JSONResponse with ``success: false`` and the message
    """
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


async def contact_api_exception_handler(
    request: Request, exc: ContactAPIError
) -> JSONResponse:
    """
    Handle custom ContactAPIError.

    Args:
        request: FastAPI request
        exc: ContactAPIError instance

    Returns:
        JSONResponse with the error message
    """
    logger.warning(
        exc.message,
        extra={
            "correlation_id": getattr(request.state, "correlation_id", None),
            "context": {
                "error_code": exc.error_code,
                "status_code": exc.status_code,
                "method": request.method,
                "path": request.url.path,
            },
        },
    )
    return create_error_response(exc.message, exc.status_code)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Map routing errors (unknown path, wrong method) to the error taxonomy.

    Args:
        request: FastAPI request
        exc: Starlette HTTPException raised by the router

    Returns:
        JSONResponse with the error message
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return await contact_api_exception_handler(request, EndpointNotFoundError())
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        response = await contact_api_exception_handler(
            request, MethodNotAllowedError()
        )
        # Starlette sets Allow on 405s
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    return create_error_response(str(exc.detail), exc.status_code, exc.headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body errors from FastAPI.

    A body that is not JSON is reported as an invalid body; any other
    shape error (missing body, non-object body) as missing fields.

    Args:
        request: FastAPI request
        exc: RequestValidationError from Pydantic

    Returns:
        JSONResponse with a 400 error
    """
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        message = INVALID_BODY_MESSAGE
    else:
        message = MISSING_FIELDS_MESSAGE

    logger.info(
        "Request validation failed",
        extra={
            "correlation_id": getattr(request.state, "correlation_id", None),
            "context": {
                "path": request.url.path,
                "error_types": [error.get("type") for error in errors],
            },
        },
    )
    return create_error_response(message, status.HTTP_400_BAD_REQUEST)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Logs full traceback and returns the generic server error to the client.

    Args:
        request: FastAPI request
        exc: Any unhandled exception

    Returns:
        JSONResponse with generic error message
    """
    correlation_id = getattr(request.state, "correlation_id", None)

    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        exc_info=exc,
        extra={
            "correlation_id": correlation_id,
            "context": {
                "exception_type": type(exc).__name__,
                "method": request.method,
                "path": request.url.path,
            },
        },
    )

    fallback = PersistenceError()
    return create_error_response(fallback.message, fallback.status_code)
