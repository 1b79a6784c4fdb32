"""Contact repository for DynamoDB operations."""

from contact_api.models.contact import Contact
from contact_api.repositories.base import BaseRepository


class ContactRepository(BaseRepository):
    """Repository for Contact submissions. Records are write-once."""

    async def create(self, contact: Contact) -> Contact:
        """
        Persist a new contact submission.

        Args:
            contact: Contact model to store

        Returns:
            The stored Contact
        """
        await self.put_item(contact.model_dump())
        return contact
