"""Pydantic schemas for contact API requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContactRequest(BaseModel):
    """
    Request schema for a contact-form submission.

    Fields are optional at the schema level so that missing or blank values
    are reported by the service with its own messages rather than as
    generic validation errors.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ann",
                "email": "ann@example.com",
                "message": "Hello there",
            }
        }
    )

    name: str | None = Field(None, description="Sender name (required)")
    email: str | None = Field(None, description="Sender email (required)")
    message: str | None = Field(None, description="Message body (required)")

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def drop_non_strings(cls, v: Any) -> str | None:
        """Treat non-string values as missing."""
        return v if isinstance(v, str) else None


class ContactResponse(BaseModel):
    """Response schema for contact endpoints (success and error)."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable message")


class HealthResponse(BaseModel):
    """
    Response schema for the health endpoint.

    Attributes:
        status: Always "OK"
        database: connected, connecting, disconnecting, disconnected or unknown
        timestamp: ISO 8601 timestamp of the check
        environment: Deployment environment label
    """

    status: str = Field(..., description="Service status")
    database: str = Field(..., description="Database connection state")
    timestamp: str = Field(..., description="ISO 8601 timestamp")
    environment: str | None = Field(None, description="Deployment environment")


class ApiTestResponse(BaseModel):
    """Response schema for the smoke-test endpoint."""

    success: bool
    message: str
    method: str
    timestamp: str
