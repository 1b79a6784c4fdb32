"""Script to create DynamoDB tables for LocalStack or AWS."""

import asyncio
from typing import Any

import aioboto3
from botocore.exceptions import ClientError

from contact_api.config import settings
from contact_api.database.connection import get_dynamodb_config


async def create_contacts_table(dynamodb: Any, table_name: str) -> bool:
    """
    Create the contact submissions table.

    Only the partition key is declared; no secondary indexes are needed.

    Args:
        dynamodb: DynamoDB resource
        table_name: Name of the contacts table

    Returns:
        True if the table was created, False if it already existed
    """
    try:
        table = await dynamodb.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "contact_id", "KeyType": "HASH"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "contact_id", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        await table.wait_until_exists()
        print(f"✓ Created table: {table_name}")
        return True
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"→ Table already exists: {table_name}")
            return False
        raise


async def main() -> None:
    """Create all required DynamoDB tables."""
    print("Creating DynamoDB tables...")
    print(f"Region: {settings.aws_region}")
    print(f"Endpoint: {settings.dynamodb_endpoint_url or 'AWS'}")
    print()

    session = aioboto3.Session()
    async with session.resource(
        "dynamodb", **get_dynamodb_config(settings)
    ) as dynamodb:
        await create_contacts_table(dynamodb, settings.dynamodb_table_contacts)

    print()
    print("✓ All tables ready")


if __name__ == "__main__":
    asyncio.run(main())
