"""Base repository class with common DynamoDB operations."""

from typing import Any

from contact_api.database.connection import ConnectionManager


class BaseRepository:
    """
    Base repository providing common DynamoDB operations.

    Repositories do not open their own resources; every operation goes
    through the shared ConnectionManager so the process keeps a single
    memoized connection.
    """

    def __init__(self, connection_manager: ConnectionManager) -> None:
        """
        Initialize repository.

        Args:
            connection_manager: Manager supplying the DynamoDB connection
        """
        self.connection_manager = connection_manager

    async def put_item(self, item: dict[str, Any]) -> None:
        """
        Put item into the table.

        Args:
            item: Dictionary representing the item to store

        Raises:
            ConnectionFailureError: If no connection could be established
            botocore.exceptions.ClientError: If DynamoDB rejects the write
        """
        connection = await self.connection_manager.acquire()
        await connection.table.put_item(Item=item)
