"""Data models for the Contact API."""

from contact_api.models.contact import Contact

__all__ = ["Contact"]
