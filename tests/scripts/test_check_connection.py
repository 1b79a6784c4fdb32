"""Tests for the connectivity diagnostics CLI."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from contact_api.database.connection import (
    ConnectionManager,
    ConnectionState,
    DynamoDBConnection,
)
from scripts.check_connection import (
    PUBLIC_IP_URL,
    cmd_ping,
    cmd_public_ip,
    diagnose,
    get_public_ip,
)


def client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "DescribeTable")


class TestDiagnose:
    """Tests for diagnose function."""

    def test_missing_table(self) -> None:
        """Test hint for a missing table."""
        hint = diagnose(client_error("ResourceNotFoundException"))
        assert "does not exist" in hint

    @pytest.mark.parametrize(
        "code", ["UnrecognizedClientException", "ExpiredTokenException"]
    )
    def test_rejected_credentials(self, code: str) -> None:
        """Test hint for credential errors."""
        assert "Credentials were rejected" in diagnose(client_error(code))

    def test_other_client_error(self) -> None:
        """Test that unknown codes are reported verbatim."""
        assert "ThrottlingException" in diagnose(client_error("ThrottlingException"))

    def test_unreachable_endpoint(self) -> None:
        """Test hint for transport failures."""
        error = EndpointConnectionError(endpoint_url="http://127.0.0.1:1")
        assert "Endpoint unreachable" in diagnose(error)

    def test_unexpected_error(self) -> None:
        """Test fallback hint."""
        assert diagnose(RuntimeError("boom")) == "Unexpected error."


class TestCmdPing:
    """Tests for cmd_ping command."""

    @pytest.mark.asyncio
    async def test_ping_success(self, test_settings, capsys) -> None:
        """Test that ping describes the table and closes the connection."""
        resource = MagicMock()
        resource.meta.client.describe_table = AsyncMock(
            return_value={"Table": {"TableStatus": "ACTIVE", "ItemCount": 7}}
        )

        async def connector() -> DynamoDBConnection:
            return DynamoDBConnection(
                resource=resource,
                table=AsyncMock(),
                table_name="contact-submissions",
                endpoint="http://dynamodb.test",
            )

        manager = ConnectionManager(config=test_settings, connector=connector)

        await cmd_ping(manager)

        output = capsys.readouterr().out
        assert "✓ Connection successful" in output
        assert "Status: ACTIVE" in output
        assert "Items (approximate): 7" in output
        resource.meta.client.describe_table.assert_awaited_once_with(
            TableName="contact-submissions"
        )
        assert manager.state == ConnectionState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_ping_failure_exits(
        self, make_connector, manager_factory, capsys
    ) -> None:
        """Test that ping exits non-zero when the connection fails."""
        manager = manager_factory(make_connector(failures=1))

        with pytest.raises(SystemExit) as exc_info:
            await cmd_ping(manager)

        assert exc_info.value.code == 1
        output = capsys.readouterr().out
        assert "✗ Connection failed: Could not connect to the endpoint URL" in output


class TestPublicIp:
    """Tests for public IP lookup."""

    @pytest.mark.asyncio
    async def test_get_public_ip(self) -> None:
        """Test that the ipify response is parsed."""

        def respond(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == PUBLIC_IP_URL
            return httpx.Response(200, json={"ip": "203.0.113.7"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(respond)) as client:
            assert await get_public_ip(client) == "203.0.113.7"

    @pytest.mark.asyncio
    async def test_get_public_ip_http_error(self) -> None:
        """Test that non-2xx responses raise."""
        transport = httpx.MockTransport(lambda request: httpx.Response(503))

        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await get_public_ip(client)

    @pytest.mark.asyncio
    async def test_cmd_public_ip_prints_rule(self, capsys) -> None:
        """Test the allow-list instructions."""
        with patch(
            "scripts.check_connection.get_public_ip",
            AsyncMock(return_value="203.0.113.7"),
        ):
            await cmd_public_ip()

        output = capsys.readouterr().out
        assert "203.0.113.7" in output
        assert "203.0.113.7/32" in output

    @pytest.mark.asyncio
    async def test_cmd_public_ip_reports_errors(self, capsys) -> None:
        """Test that lookup failures are reported, not raised."""
        with patch(
            "scripts.check_connection.get_public_ip",
            AsyncMock(side_effect=httpx.ConnectError("offline")),
        ):
            await cmd_public_ip()

        output = capsys.readouterr().out
        assert "✗ Error getting IP: offline" in output
