"""Middleware components for request processing."""

from contact_api.middleware.cors import PreflightCORSMiddleware
from contact_api.middleware.logging import LoggingMiddleware
from contact_api.middleware.request_validation import RequestSizeValidationMiddleware

__all__ = [
    "LoggingMiddleware",
    "PreflightCORSMiddleware",
    "RequestSizeValidationMiddleware",
]
