"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        description="PostgreSQL async connection string",
    )
    database_schema: str | None = Field(
        default=None,
        description="PostgreSQL schema for isolated environments (e.g., pr_42)",
    )

    @field_validator("database_schema")
    @classmethod
    def validate_database_schema(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not re.match(r"^[a-z_][a-z0-9_]{0,62}$", v):
            msg = "Invalid database_schema: must match ^[a-z_][a-z0-9_]{0,62}$"
            raise ValueError(msg)
        return v

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    # SMS gateway
    sms_gateway_url: str | None = Field(
        default=None,
        description="HTTP endpoint of the SMS gateway (SMS delivery is disabled when unset)",
    )
    sms_api_key: str | None = Field(
        default=None,
        description="API key sent to the SMS gateway as a bearer token",
    )
    sms_sender: str = Field(
        default="observers",
        description="Sender name shown to SMS recipients",
    )
    sms_timeout: float = Field(
        default=10.0,
        description="SMS gateway request timeout in seconds",
        gt=0,
    )

    # Accounts
    login_url: str = Field(
        default="bit.ly/rosvybory",
        description="Login address included in password messages",
    )

    # Environment
    environment: str = Field(
        default="production",
        description="Deployment environment name (e.g. production, dev, staging)",
    )

    @field_validator("sms_gateway_url")
    @classmethod
    def validate_sms_gateway_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        if not v.startswith(("https://", "http://")):
            msg = "sms_gateway_url must be an http(s) URL"
            raise ValueError(msg)
        return v


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]
