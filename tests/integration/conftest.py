"""Pytest fixtures for integration tests against a local moto DynamoDB server."""

import uuid
from collections.abc import AsyncGenerator, Generator
from typing import Any

import aioboto3
import pytest
from moto.server import ThreadedMotoServer

from contact_api.config import Settings
from contact_api.database.connection import ConnectionManager, get_dynamodb_config
from infrastructure.dynamodb_tables import create_contacts_table

MOTO_HOST = "127.0.0.1"
MOTO_PORT = 5555


@pytest.fixture(scope="session")
def moto_server() -> Generator[str, None, None]:
    """Run an in-process moto server for the whole session."""
    server = ThreadedMotoServer(ip_address=MOTO_HOST, port=MOTO_PORT)
    server.start()
    yield f"http://{MOTO_HOST}:{MOTO_PORT}"
    server.stop()


@pytest.fixture
def integration_settings(moto_server: str) -> Settings:
    """
    Settings pointing at moto with a fresh table name per test.

    Tables are never shared between tests, so no cleanup is needed.
    """
    return Settings(
        _env_file=None,
        aws_region="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        dynamodb_endpoint_url=moto_server,
        dynamodb_table_contacts=f"contacts-{uuid.uuid4().hex[:8]}",
        db_connect_timeout_seconds=1,
        db_socket_timeout_seconds=5,
        db_max_retry_attempts=1,
    )


@pytest.fixture
async def dynamodb(integration_settings: Settings) -> AsyncGenerator[Any, None]:
    """Open a DynamoDB resource on the moto server."""
    session = aioboto3.Session()
    async with session.resource(
        "dynamodb", **get_dynamodb_config(integration_settings)
    ) as resource:
        yield resource


@pytest.fixture
async def contacts_table(dynamodb: Any, integration_settings: Settings) -> Any:
    """Create the contacts table and return it."""
    await create_contacts_table(dynamodb, integration_settings.dynamodb_table_contacts)
    return await dynamodb.Table(integration_settings.dynamodb_table_contacts)


@pytest.fixture
async def connection_manager(
    integration_settings: Settings,
) -> AsyncGenerator[ConnectionManager, None]:
    """
    Real ConnectionManager on moto.

    Overrides the root fixture so ``api_client`` serves requests through it.
    """
    manager = ConnectionManager(config=integration_settings)
    yield manager
    await manager.close()
