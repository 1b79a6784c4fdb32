"""Health check and smoke-test endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from contact_api.config import settings
from contact_api.database.connection import (
    ConnectionManager,
    ConnectionState,
    get_connection_manager,
)
from contact_api.logging.config import get_logger
from contact_api.schemas.contact import ApiTestResponse, HealthResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])

KNOWN_STATES = {state.value for state in ConnectionState}


def _now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def describe_database_state(connection_manager: ConnectionManager) -> str:
    """
    Describe the database connection state without touching the network.

    Args:
        connection_manager: Manager to inspect

    Returns:
        connected, connecting, disconnecting, disconnected or unknown
    """
    try:
        state = connection_manager.state
    except Exception:
        logger.exception("Could not read database connection state")
        return "unknown"

    value = getattr(state, "value", state)
    return value if value in KNOWN_STATES else "unknown"


@router.get("/health", response_model=HealthResponse)
async def get_health(
    connection_manager: ConnectionManager = Depends(get_connection_manager),
) -> JSONResponse:
    """
    Health check endpoint for monitoring and load balancers.

    Always returns 200. Reports the database connection state but never
    triggers a connection attempt.

    Returns:
        JSONResponse with status, database state, timestamp and environment
    """
    return JSONResponse(
        status_code=200,
        content={
            "status": "OK",
            "database": describe_database_state(connection_manager),
            "timestamp": _now(),
            "environment": settings.environment,
        },
    )


@router.api_route(
    "/test",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    response_model=ApiTestResponse,
)
async def api_test(request: Request) -> JSONResponse:
    """
    Smoke-test endpoint confirming the API is reachable.

    Returns:
        JSONResponse echoing the request method
    """
    return JSONResponse(
        status_code=200,
        content={
            "success": True,
            "message": "API is working!",
            "method": request.method,
            "timestamp": _now(),
        },
    )
