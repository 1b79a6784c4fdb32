"""Contact service layer: validate a submission, then persist it."""

import re
import uuid
from datetime import UTC, datetime

from contact_api.database.connection import ConnectionManager, get_connection_manager
from contact_api.exceptions import (
    ConnectionFailureError,
    PersistenceError,
    ServiceUnavailableError,
    ValidationError,
)
from contact_api.logging.config import get_logger
from contact_api.models.contact import Contact
from contact_api.repositories.contact_repository import ContactRepository
from contact_api.schemas.contact import ContactRequest, ContactResponse

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MISSING_FIELDS_MESSAGE = "All fields are required"
INVALID_EMAIL_MESSAGE = "Invalid email format"
SUCCESS_MESSAGE = "Contact form submitted successfully"


def validate_submission(request: ContactRequest) -> ContactRequest:
    """
    Validate a submission and return it with trimmed values.

    Args:
        request: Raw contact-form payload

    Returns:
        ContactRequest with trimmed name, email and message

    Raises:
        ValidationError: If a field is missing or blank, or the email is
            malformed
    """
    name = (request.name or "").strip()
    email = (request.email or "").strip()
    message = (request.message or "").strip()

    if not name or not email or not message:
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    if not EMAIL_PATTERN.match(email):
        raise ValidationError(INVALID_EMAIL_MESSAGE)

    return ContactRequest(name=name, email=email, message=message)


class ContactService:
    """
    Service layer for contact-form submissions.

    Shared by every entry point (uvicorn server and Lambda handler).
    Each call turns one request into exactly one stored record or a
    well-defined rejection.
    """

    def __init__(
        self,
        connection_manager: ConnectionManager | None = None,
        repository: ContactRepository | None = None,
    ) -> None:
        """
        Initialize ContactService.

        Args:
            connection_manager: Shared manager (process-wide one if None)
            repository: ContactRepository instance (creates new if None)
        """
        self.connection_manager = connection_manager or get_connection_manager()
        self.repository = repository or ContactRepository(self.connection_manager)

    async def submit(self, request: ContactRequest) -> ContactResponse:
        """
        Validate and persist a contact-form submission.

        Args:
            request: Contact-form payload

        Returns:
            ContactResponse acknowledging the stored record

        Raises:
            ValidationError: Missing/blank fields or malformed email (400)
            ServiceUnavailableError: No database connection available (503)
            PersistenceError: The write failed (500)
        """
        submission = validate_submission(request)

        try:
            await self.connection_manager.acquire()
        except ConnectionFailureError as exc:
            logger.error(
                "Database connection unavailable for contact submission",
                exc_info=exc,
                extra={
                    "context": {"state": self.connection_manager.state.value}
                },
            )
            raise ServiceUnavailableError() from exc

        now = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        contact = Contact(
            contact_id=str(uuid.uuid4()),
            name=submission.name,
            email=submission.email,
            message=submission.message,
            created_at=now,
            updated_at=now,
        )

        try:
            await self.repository.create(contact)
        except Exception as exc:
            logger.error(
                f"Contact form error: {type(exc).__name__}: {exc}",
                exc_info=exc,
                extra={"context": {"contact_id": contact.contact_id}},
            )
            raise PersistenceError() from exc

        logger.info(
            "Contact form submitted",
            extra={"context": {"contact_id": contact.contact_id}},
        )
        return ContactResponse(success=True, message=SUCCESS_MESSAGE)
