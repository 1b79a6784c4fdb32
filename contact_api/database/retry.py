"""Fixed-count startup retry policy for the long-running server."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from contact_api.config import Settings
from contact_api.database.connection import ConnectionManager, DynamoDBConnection
from contact_api.exceptions import ConnectionFailureError, StartupConnectionError
from contact_api.logging.config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Startup connection retry policy.

    Attributes:
        max_attempts: Total connection attempts before giving up
        delay_seconds: Fixed delay between attempts
    """

    max_attempts: int = 3
    delay_seconds: float = 5.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")

    @classmethod
    def from_settings(cls, config: Settings) -> "RetryPolicy":
        """Build the policy from application settings."""
        return cls(
            max_attempts=config.startup_connect_attempts,
            delay_seconds=config.startup_retry_delay_seconds,
        )


async def connect_with_retry(
    manager: ConnectionManager,
    policy: RetryPolicy,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> DynamoDBConnection:
    """
    Connect through the manager, retrying with a fixed delay.

    Args:
        manager: ConnectionManager to acquire from
        policy: Retry policy to apply
        sleep: Awaitable sleep function (injected by tests)

    Returns:
        The established connection

    Raises:
        StartupConnectionError: If every attempt failed
    """
    for attempt in range(1, policy.max_attempts + 1):
        logger.info(
            f"Attempting to connect to DynamoDB ({attempt}/{policy.max_attempts})"
        )
        try:
            return await manager.acquire()
        except ConnectionFailureError as exc:
            remaining = policy.max_attempts - attempt
            logger.error(
                f"Startup connection attempt failed: {exc.__cause__ or exc}",
                extra={
                    "context": {
                        "attempt": attempt,
                        "attempts_left": remaining,
                    }
                },
            )
            if remaining == 0:
                logger.critical("Max retries reached, giving up")
                raise StartupConnectionError(policy.max_attempts) from exc

            logger.info(
                f"Retrying in {policy.delay_seconds:g} seconds "
                f"({remaining} attempts left)"
            )
            await sleep(policy.delay_seconds)

    # Unreachable: the loop either returns or raises
    raise StartupConnectionError(policy.max_attempts)
