"""Shared pytest fixtures: fake DynamoDB connections and the app client."""

import asyncio
from collections.abc import AsyncGenerator, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from contact_api.config import Settings
from contact_api.database.connection import (
    ConnectionManager,
    DynamoDBConnection,
    get_connection_manager,
)
from contact_api.main import app


class FakeConnector:
    """
    Stand-in for ``open_dynamodb_connection``.

    Counts calls, can fail a configurable number of times, and can be held
    open on a gate to observe in-flight behaviour.
    """

    def __init__(self, table: AsyncMock | None = None, failures: int = 0) -> None:
        self.table = table or AsyncMock()
        self.failures = failures
        self.calls = 0
        self.started = asyncio.Event()
        self.gate: asyncio.Event | None = None

    def hold(self) -> asyncio.Event:
        """Block connection attempts until the returned event is set."""
        self.gate = asyncio.Event()
        return self.gate

    async def __call__(self) -> DynamoDBConnection:
        self.calls += 1
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.failures > 0:
            self.failures -= 1
            raise OSError("Could not connect to the endpoint URL")
        return DynamoDBConnection(
            resource=MagicMock(),
            table=self.table,
            table_name="contact-submissions",
            endpoint="http://dynamodb.test",
        )


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        dynamodb_table_contacts="contact-submissions",
        startup_connect_attempts=3,
        startup_retry_delay_seconds=5,
    )


@pytest.fixture
def make_connector() -> type[FakeConnector]:
    """The FakeConnector class, for tests that need custom instances."""
    return FakeConnector


@pytest.fixture
def connector() -> FakeConnector:
    """A connector that succeeds immediately."""
    return FakeConnector()


@pytest.fixture
def manager_factory(test_settings: Settings) -> Callable[..., ConnectionManager]:
    """Build ConnectionManagers around a given connector."""

    def factory(connector: FakeConnector) -> ConnectionManager:
        return ConnectionManager(config=test_settings, connector=connector)

    return factory


@pytest.fixture
def connection_manager(
    connector: FakeConnector, manager_factory: Callable[..., ConnectionManager]
) -> ConnectionManager:
    """ConnectionManager backed by the succeeding fake connector."""
    return manager_factory(connector)


@pytest.fixture
async def api_client(
    connection_manager: ConnectionManager,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client whose requests share ``connection_manager``."""
    app.dependency_overrides[get_connection_manager] = lambda: connection_manager
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
