"""
Process-wide DynamoDB connection manager.

The manager lazily opens one aioboto3 DynamoDB resource and memoizes it for
the lifetime of the process. In Lambda this means the connection survives
across warm invocations. Concurrent first-time callers share a single
in-flight attempt; a failed attempt is forgotten so the next caller starts
over.
"""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import aioboto3
from botocore.config import Config

from contact_api.config import Settings
from contact_api.config import settings as default_settings
from contact_api.exceptions import ConnectionFailureError
from contact_api.logging.config import get_logger

logger = get_logger(__name__)

LIFECYCLE_EVENTS = ("connected", "error", "disconnected")


class ConnectionState(str, Enum):
    """Connection states reported by the health endpoint."""

    CONNECTED = "connected"
    CONNECTING = "connecting"
    DISCONNECTING = "disconnecting"
    DISCONNECTED = "disconnected"


@dataclass
class DynamoDBConnection:
    """An open DynamoDB resource bound to the contacts table."""

    resource: Any
    table: Any
    table_name: str
    endpoint: str
    exit_stack: contextlib.AsyncExitStack | None = None

    async def close(self) -> None:
        """Exit the underlying aioboto3 resource context."""
        if self.exit_stack is not None:
            await self.exit_stack.aclose()
            self.exit_stack = None


Connector = Callable[[], Awaitable[DynamoDBConnection]]


def get_dynamodb_config(config: Settings) -> dict[str, Any]:
    """
    Build DynamoDB resource parameters based on environment.

    For AWS Lambda with IAM roles, returns minimal config (region only).
    For LocalStack or moto, includes endpoint_url and explicit credentials.

    Args:
        config: Application settings

    Returns:
        Dictionary of aioboto3 resource parameters
    """
    params: dict[str, Any] = {"region_name": config.aws_region}

    if config.dynamodb_endpoint_url:
        params["endpoint_url"] = config.dynamodb_endpoint_url

    # Lambda supplies temporary credentials, all three must be passed through
    if config.aws_access_key_id:
        params["aws_access_key_id"] = config.aws_access_key_id
    if config.aws_secret_access_key:
        params["aws_secret_access_key"] = config.aws_secret_access_key
    if config.aws_session_token:
        params["aws_session_token"] = config.aws_session_token

    return params


def get_client_config(config: Settings) -> Config:
    """
    Build botocore client config carrying timeouts and pool bounds.

    Args:
        config: Application settings

    Returns:
        botocore Config for the DynamoDB resource
    """
    return Config(
        connect_timeout=config.db_connect_timeout_seconds,
        read_timeout=config.db_socket_timeout_seconds,
        max_pool_connections=config.db_max_pool_size,
        retries={
            "max_attempts": config.db_max_retry_attempts,
            "mode": "standard",
        },
    )


async def open_dynamodb_connection(config: Settings) -> DynamoDBConnection:
    """
    Open a DynamoDB resource and verify the contacts table is reachable.

    Args:
        config: Application settings

    Returns:
        Open DynamoDBConnection

    Raises:
        botocore.exceptions.BotoCoreError: On transport failures or timeouts
        botocore.exceptions.ClientError: On auth failures or a missing table
    """
    session = aioboto3.Session()
    exit_stack = contextlib.AsyncExitStack()
    try:
        resource = await exit_stack.enter_async_context(
            session.resource(
                "dynamodb",
                config=get_client_config(config),
                **get_dynamodb_config(config),
            )
        )
        # describe_table forces a round trip so bad credentials or a
        # missing table fail here rather than on the first write
        await resource.meta.client.describe_table(
            TableName=config.dynamodb_table_contacts
        )
        table = await resource.Table(config.dynamodb_table_contacts)
    except BaseException:
        await exit_stack.aclose()
        raise

    return DynamoDBConnection(
        resource=resource,
        table=table,
        table_name=config.dynamodb_table_contacts,
        endpoint=config.dynamodb_endpoint_url or f"dynamodb.{config.aws_region}",
        exit_stack=exit_stack,
    )


class ConnectionManager:
    """
    Single-flight, memoizing lazy initializer for the DynamoDB connection.

    Only the manager mutates the cached state: it sets the connection on
    success and clears the in-flight attempt on success or failure.
    Handlers only read it through ``acquire()``.
    """

    def __init__(
        self,
        config: Settings | None = None,
        connector: Connector | None = None,
    ) -> None:
        """
        Initialize ConnectionManager.

        Args:
            config: Settings to connect with (defaults to global settings)
            connector: Async factory opening a connection (defaults to
                ``open_dynamodb_connection``)
        """
        self.settings = config or default_settings
        self._connector = connector or self._open_default
        self._connection: DynamoDBConnection | None = None
        self._pending: asyncio.Task | None = None
        self._closing = False
        self._lock = asyncio.Lock()
        self._listeners: dict[str, list[Callable[..., Any]]] = {
            event: [] for event in LIFECYCLE_EVENTS
        }
        self.attempts = 0

    async def _open_default(self) -> DynamoDBConnection:
        return await open_dynamodb_connection(self.settings)

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        if self._closing:
            return ConnectionState.DISCONNECTING
        if self._connection is not None:
            return ConnectionState.CONNECTED
        if self._pending is not None:
            return ConnectionState.CONNECTING
        return ConnectionState.DISCONNECTED

    @property
    def is_ready(self) -> bool:
        """Whether a connection is cached and usable."""
        return self._connection is not None and not self._closing

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        """
        Subscribe to a lifecycle notification.

        Args:
            event: One of ``connected``, ``error``, ``disconnected``
            callback: Called with the connection (connected), the exception
                (error) or nothing (disconnected)

        Raises:
            ValueError: If the event name is unknown
        """
        if event not in self._listeners:
            raise ValueError(f"Unknown connection event: {event}")
        self._listeners[event].append(callback)

    def _emit(self, event: str, *args: Any) -> None:
        for callback in self._listeners[event]:
            try:
                callback(*args)
            except Exception:
                logger.exception(
                    "Connection listener failed",
                    extra={"context": {"event": event}},
                )

    async def acquire(self) -> DynamoDBConnection:
        """
        Return a ready connection, establishing it at most once.

        Returns:
            The cached DynamoDBConnection

        Raises:
            ConnectionFailureError: If the (shared) attempt failed
        """
        connection = self._connection
        if connection is not None:
            return connection

        async with self._lock:
            if self._connection is not None:
                return self._connection
            if self._pending is None:
                self.attempts += 1
                self._pending = asyncio.ensure_future(
                    self._establish(self.attempts)
                )
            pending = self._pending

        # Shielded so one cancelled caller does not abort the shared attempt
        return await asyncio.shield(pending)

    async def _establish(self, attempt: int) -> DynamoDBConnection:
        logger.info(
            "Connecting to DynamoDB",
            extra={
                "context": {
                    "attempt": attempt,
                    "table": self.settings.dynamodb_table_contacts,
                }
            },
        )
        try:
            connection = await self._connector()
        except Exception as exc:
            logger.error(
                f"DynamoDB connection error: {type(exc).__name__}: {exc}",
                exc_info=exc,
                extra={"context": {"attempt": attempt}},
            )
            self._emit("error", exc)
            raise ConnectionFailureError(
                "Failed to connect to DynamoDB"
            ) from exc
        else:
            self._connection = connection
        finally:
            self._pending = None

        logger.info(
            "DynamoDB connected",
            extra={
                "context": {
                    "endpoint": connection.endpoint,
                    "table": connection.table_name,
                }
            },
        )
        self._emit("connected", connection)
        return connection

    async def close(self) -> None:
        """Close the cached connection and cancel any in-flight attempt."""
        pending = self._pending
        if pending is not None:
            pending.cancel()
            with contextlib.suppress(
                asyncio.CancelledError, ConnectionFailureError
            ):
                await pending

        connection = self._connection
        if connection is None:
            return

        self._closing = True
        try:
            await connection.close()
        finally:
            self._connection = None
            self._closing = False

        logger.info(
            "DynamoDB disconnected",
            extra={"context": {"table": connection.table_name}},
        )
        self._emit("disconnected")


# Process-wide instance, created on first use
_connection_manager: ConnectionManager | None = None


def get_connection_manager() -> ConnectionManager:
    """
    Get the process-wide ConnectionManager (FastAPI dependency).

    Returns:
        Shared ConnectionManager instance
    """
    global _connection_manager
    if _connection_manager is None:
        _connection_manager = ConnectionManager()
    return _connection_manager


def reset_connection_manager() -> None:
    """Drop the process-wide instance so the next lookup creates a new one."""
    global _connection_manager
    _connection_manager = None
