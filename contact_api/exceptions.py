"""Custom exception classes for the Contact API."""


class ContactAPIError(Exception):
    """Base exception for Contact API."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
    ) -> None:
        """
        Initialize exception.

        Args:
            message: Client-facing error message
            status_code: HTTP status code
            error_code: Machine-readable error code (logged, not returned)
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code


class ValidationError(ContactAPIError):
    """Raised when a submission is missing fields or malformed (400)."""

    def __init__(self, message: str = "All fields are required") -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
        )


class EndpointNotFoundError(ContactAPIError):
    """Raised when no route matches the request (404)."""

    def __init__(self, message: str = "Endpoint not found") -> None:
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
        )


class MethodNotAllowedError(ContactAPIError):
    """Raised when the route exists but not for this method (405)."""

    def __init__(self, message: str = "Method Not Allowed") -> None:
        super().__init__(
            message=message,
            status_code=405,
            error_code="METHOD_NOT_ALLOWED",
        )


class RequestTooLargeError(ContactAPIError):
    """Raised when request payload exceeds size limit (413)."""

    def __init__(self, message: str = "Request payload too large") -> None:
        super().__init__(
            message=message,
            status_code=413,
            error_code="PAYLOAD_TOO_LARGE",
        )


class ServiceUnavailableError(ContactAPIError):
    """Raised when the database connection cannot be supplied (503)."""

    def __init__(
        self, message: str = "Database connection unavailable"
    ) -> None:
        super().__init__(
            message=message,
            status_code=503,
            error_code="SERVICE_UNAVAILABLE",
        )


class PersistenceError(ContactAPIError):
    """Raised when a write fails after the connection was established (500)."""

    def __init__(
        self, message: str = "Server error. Please try again later."
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="PERSISTENCE_FAILURE",
        )


class ConnectionFailureError(Exception):
    """
    Raised when establishing the database connection fails.

    The underlying transport/auth error is chained as ``__cause__``.
    Never rendered to clients directly.
    """


class StartupConnectionError(Exception):
    """Raised when the startup retry policy is exhausted."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"Could not connect to the database after {attempts} attempt(s)"
        )
        self.attempts = attempts
