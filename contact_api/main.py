"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from contact_api.config import settings
from contact_api.database.connection import get_connection_manager
from contact_api.database.retry import RetryPolicy, connect_with_retry
from contact_api.exceptions import ContactAPIError
from contact_api.handlers.exception_handler import (
    contact_api_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from contact_api.logging.config import configure_logging, get_logger
from contact_api.middleware.cors import PreflightCORSMiddleware
from contact_api.middleware.logging import LoggingMiddleware
from contact_api.middleware.request_validation import RequestSizeValidationMiddleware
from contact_api.routes import contact, status

# Configure logging before creating the app
configure_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan for the long-running server.

    STARTUP: connect to DynamoDB under the startup retry policy. If every
    attempt fails the error propagates and the server exits.

    SHUTDOWN: close the cached connection.

    Lambda runs with lifespan disabled and connects lazily instead.
    """
    manager = get_connection_manager()
    await connect_with_retry(manager, RetryPolicy.from_settings(settings))
    logger.info(
        "Server ready",
        extra={
            "context": {
                "port": settings.port,
                "health": f"http://localhost:{settings.port}/api/health",
            }
        },
    )

    yield

    logger.info("Shutting down gracefully")
    await manager.close()


app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="""
## Contact Form API

Accepts contact-form submissions (name, email, message), validates them and
stores each one as a record in DynamoDB.

### Endpoints

- **POST /api/contact**: Submit the form (201 on success)
- **GET /api/health**: Service and database connection state
- **/api/test**: Smoke test, echoes the request method
""",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Last added = outermost: CORS answers preflights before anything else runs
app.add_middleware(RequestSizeValidationMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    PreflightCORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.add_exception_handler(ContactAPIError, contact_api_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(contact.router)
app.include_router(status.router)
