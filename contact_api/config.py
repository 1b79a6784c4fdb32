"""Configuration management using Pydantic Settings."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Only load .env file in development (not Lambda/production)
        env_file=".env" if os.getenv("AWS_EXECUTION_ENV") is None else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AWS Configuration
    aws_region: str = "us-east-2"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_session_token: str | None = None

    @field_validator(
        "aws_access_key_id",
        "aws_secret_access_key",
        "aws_session_token",
        "dynamodb_endpoint_url",
        mode="before",
    )
    @classmethod
    def convert_empty_string_to_none(cls, v):
        """Convert empty strings to None so boto3 can use IAM role in Lambda."""
        if v is None:
            return None
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    # DynamoDB Configuration
    dynamodb_endpoint_url: str | None = None
    dynamodb_table_contacts: str = "contact-submissions"
    db_connect_timeout_seconds: float = 5.0
    db_socket_timeout_seconds: float = 45.0
    db_max_pool_size: int = 10
    db_max_retry_attempts: int = 3

    # Startup retry policy (long-running server only)
    startup_connect_attempts: int = 3
    startup_retry_delay_seconds: float = 5.0

    # HTTP Configuration
    host: str = "0.0.0.0"
    port: int = 5000
    allowed_origins: str = "http://localhost:3000"
    max_request_size_bytes: int = 10 * 1024  # 10KB

    # Application Configuration
    environment: str = "development"
    log_level: str = "INFO"
    api_title: str = "Contact Form API"
    api_version: str = "1.0.0"

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins; ``*`` allows any origin."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]


# Global settings instance
settings = Settings()
