"""Repository layer for DynamoDB operations."""

from contact_api.repositories.contact_repository import ContactRepository

__all__ = ["ContactRepository"]
