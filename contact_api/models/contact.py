"""Contact submission model for DynamoDB."""

from pydantic import BaseModel, ConfigDict, Field


class Contact(BaseModel):
    """
    A persisted contact-form submission.

    Records are written once and never updated; ``created_at`` and
    ``updated_at`` are equal at creation.

    Attributes:
        contact_id: Unique identifier (UUID v4), the table's partition key
        name: Sender name (trimmed)
        email: Sender email address (trimmed)
        message: Message body (trimmed)
        created_at: ISO 8601 timestamp of record creation
        updated_at: ISO 8601 timestamp of last update
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "contact_id": "550e8400-e29b-41d4-a716-446655440000",
                "name": "Ann",
                "email": "ann@example.com",
                "message": "Hello there",
                "created_at": "2025-11-11T12:00:00Z",
                "updated_at": "2025-11-11T12:00:00Z",
            }
        }
    )

    contact_id: str = Field(..., description="Unique contact identifier (UUID)")
    name: str = Field(..., min_length=1, description="Sender name")
    email: str = Field(..., min_length=3, description="Sender email")
    message: str = Field(..., min_length=1, description="Message body")
    created_at: str = Field(..., description="ISO 8601 creation timestamp")
    updated_at: str = Field(..., description="ISO 8601 update timestamp")
