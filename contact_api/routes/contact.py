"""API routes for contact-form submissions."""

from fastapi import APIRouter, Depends, Response, status

from contact_api.database.connection import ConnectionManager, get_connection_manager
from contact_api.schemas.contact import ContactRequest, ContactResponse
from contact_api.services.contact_service import ContactService

router = APIRouter(prefix="/api", tags=["Contact"])


def _error_example(description: str, message: str) -> dict:
    return {
        "description": description,
        "content": {
            "application/json": {
                "example": {"success": False, "message": message}
            }
        },
    }


@router.post(
    "/contact",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Submission stored",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Contact form submitted successfully",
                    }
                }
            },
        },
        400: _error_example("Missing field or malformed email", "All fields are required"),
        405: _error_example("Method other than POST", "Method Not Allowed"),
        413: _error_example("Body over the size limit", "Request payload too large"),
        500: _error_example(
            "Write failed", "Server error. Please try again later."
        ),
        503: _error_example(
            "Database connection unavailable", "Database connection unavailable"
        ),
    },
)
async def submit_contact(
    contact_request: ContactRequest,
    connection_manager: ConnectionManager = Depends(get_connection_manager),
) -> ContactResponse:
    """
    Submit a contact form.

    Validates name, email and message, then stores one record in DynamoDB.

    Args:
        contact_request: Contact-form payload
        connection_manager: Shared connection manager (injected)

    Returns:
        ContactResponse acknowledging the submission

    Raises:
        ValidationError: Missing/blank fields or malformed email (400)
        ServiceUnavailableError: Database connection unavailable (503)
        PersistenceError: The write failed (500)
    """
    service = ContactService(connection_manager=connection_manager)
    return await service.submit(contact_request)


@router.options("/contact", include_in_schema=False)
async def contact_options() -> Response:
    """
    Answer OPTIONS requests that are not CORS preflights.

    Real preflights are answered by the CORS middleware before routing.

    Returns:
        Empty 200 response
    """
    return Response(status_code=status.HTTP_200_OK)
