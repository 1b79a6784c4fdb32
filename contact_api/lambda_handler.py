"""AWS Lambda handler for the Contact API.

This module provides the Lambda function handler that wraps the FastAPI
application using the Mangum adapter. This enables the FastAPI app to run
on AWS Lambda behind API Gateway.

Lifespan is disabled: there is no startup retry loop in Lambda. The first
submission on a cold container opens the DynamoDB connection and warm
invocations reuse it, since the ConnectionManager lives at module level.
"""

from mangum import Mangum

from contact_api.main import app

# Mangum converts API Gateway events to ASGI requests and back
handler = Mangum(app, lifespan="off")


def lambda_handler(event: dict, context: object) -> dict:
    """
    AWS Lambda function handler.

    Args:
        event: API Gateway event containing request details
        context: Lambda context object with runtime information

    Returns:
        API Gateway response dict with statusCode, headers, and body

    Notes:
        - Set ALLOWED_ORIGINS=* to accept any origin
        - DYNAMODB_ENDPOINT_URL should be unset in production (AWS endpoint)
    """
    return handler(event, context)
