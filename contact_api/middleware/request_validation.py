"""Request validation middleware."""

from fastapi import HTTPException
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from contact_api.config import settings
from contact_api.exceptions import RequestTooLargeError
from contact_api.handlers.exception_handler import create_error_response
from contact_api.logging.config import get_logger

logger = get_logger(__name__)


class RequestSizeValidationMiddleware:
    """
    Middleware to cap request body size.

    A declared Content-Length over the limit is rejected with 413 before the
    app runs. Bodies without one (chunked transfer) are counted as they are
    read, and the read fails with a 413 HTTPException once the limit is
    crossed, which the app's HTTP exception handler renders.
    """

    def __init__(self, app: ASGIApp, max_size_bytes: int | None = None) -> None:
        self.app = app
        self.max_size_bytes = max_size_bytes or settings.max_request_size_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        content_length = Headers(scope=scope).get("content-length")

        if content_length:
            try:
                size = int(content_length)
            except ValueError:
                # Invalid Content-Length header, let the server reject it
                size = 0

            if size > self.max_size_bytes:
                exc = RequestTooLargeError()
                self._log_rejection(exc, size, path)
                response = create_error_response(exc.message, exc.status_code)
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_size_bytes:
                    exc = RequestTooLargeError()
                    self._log_rejection(exc, received, path)
                    raise HTTPException(status_code=exc.status_code, detail=exc.message)
            return message

        await self.app(scope, limited_receive, send)

    def _log_rejection(self, exc: RequestTooLargeError, size: int, path: str) -> None:
        logger.warning(
            exc.message,
            extra={
                "context": {
                    "request_size": size,
                    "max_size": self.max_size_bytes,
                    "path": path,
                }
            },
        )
