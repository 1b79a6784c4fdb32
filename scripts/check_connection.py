#!/usr/bin/env python3
"""
CLI for connectivity diagnostics.

Provides commands to test the DynamoDB connection and to look up the
public IP address that outbound traffic originates from.
"""

import argparse
import asyncio
import sys

import httpx
from botocore.exceptions import BotoCoreError, ClientError

from contact_api.config import settings
from contact_api.database.connection import ConnectionManager
from contact_api.exceptions import ConnectionFailureError

PUBLIC_IP_URL = "https://api.ipify.org?format=json"


def diagnose(error: BaseException) -> str:
    """
    Suggest a likely cause for a connection failure.

    Args:
        error: The underlying botocore error

    Returns:
        Human-readable hint
    """
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        if code == "ResourceNotFoundException":
            return (
                f"Table '{settings.dynamodb_table_contacts}' does not exist. "
                "Run infrastructure/dynamodb_tables.py to create it."
            )
        if code in (
            "UnrecognizedClientException",
            "InvalidSignatureException",
            "AccessDeniedException",
            "ExpiredTokenException",
        ):
            return "Credentials were rejected. Check AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY / AWS_SESSION_TOKEN."
        return f"DynamoDB returned {code or 'an error'}."
    if isinstance(error, BotoCoreError):
        return (
            "Endpoint unreachable or timed out. Check DYNAMODB_ENDPOINT_URL, "
            "AWS_REGION and network access (see `public-ip`)."
        )
    return "Unexpected error."


async def cmd_ping(manager: ConnectionManager | None = None) -> None:
    """
    Open a connection, describe the contacts table, then close.

    Args:
        manager: ConnectionManager to use (creates new if None)
    """
    manager = manager or ConnectionManager()

    print("Testing DynamoDB connection...")
    print(f"Region: {settings.aws_region}")
    print(f"Endpoint: {settings.dynamodb_endpoint_url or 'AWS'}")
    print(f"Table: {settings.dynamodb_table_contacts}")

    try:
        connection = await manager.acquire()
    except ConnectionFailureError as exc:
        cause = exc.__cause__ or exc
        print(f"✗ Connection failed: {cause}")
        print(f"  {diagnose(cause)}")
        sys.exit(1)

    try:
        description = await connection.resource.meta.client.describe_table(
            TableName=connection.table_name
        )
        table = description["Table"]
        print("✓ Connection successful")
        print(f"  Status: {table.get('TableStatus', 'UNKNOWN')}")
        print(f"  Items (approximate): {table.get('ItemCount', 0)}")
    finally:
        await manager.close()
        print("✓ Connection closed")


async def get_public_ip(client: httpx.AsyncClient) -> str:
    """
    Fetch this machine's public IP address.

    Args:
        client: HTTP client to use

    Returns:
        Public IP address
    """
    response = await client.get(PUBLIC_IP_URL)
    response.raise_for_status()
    return response.json()["ip"]


async def cmd_public_ip() -> None:
    """Print the public IP and how to allow it through a network ACL."""
    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            ip = await get_public_ip(client)
    except (httpx.HTTPError, KeyError, ValueError) as exc:
        print(f"✗ Error getting IP: {exc}")
        print("  Alternative: run `curl ifconfig.me`")
        return

    print(f"Your current public IP address is: {ip}")
    print("To allow this address to reach the database endpoint:")
    print("  1. Open the security group / network ACL guarding the endpoint")
    print(f"  2. Add an inbound rule for {ip}/32 on port 443")
    print("  3. Re-run `ping` to confirm")


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Contact API connectivity diagnostics"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    subparsers.add_parser("ping", help="Test the DynamoDB connection")
    subparsers.add_parser("public-ip", help="Show this machine's public IP")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "ping":
        asyncio.run(cmd_ping())
    elif args.command == "public-ip":
        asyncio.run(cmd_public_ip())


if __name__ == "__main__":
    main()
