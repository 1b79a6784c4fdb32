"""Database connection management."""

from contact_api.database.connection import (
    ConnectionManager,
    ConnectionState,
    DynamoDBConnection,
    get_connection_manager,
    reset_connection_manager,
)
from contact_api.database.retry import RetryPolicy, connect_with_retry

__all__ = [
    "ConnectionManager",
    "ConnectionState",
    "DynamoDBConnection",
    "RetryPolicy",
    "connect_with_retry",
    "get_connection_manager",
    "reset_connection_manager",
]
