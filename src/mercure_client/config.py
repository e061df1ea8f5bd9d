"""
Configuration module for the Mercure client.
"""

from enum import Enum
from functools import lru_cache
from typing import Any, List, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mercure_client.cookie import MAX_AGE_LIMIT_SECONDS


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Settings for the Mercure client.
    Loads environment variables, with fallbacks to default values where appropriate.
    All environment variables are prefixed with MERCURE_CLIENT_.
    """

    # Core settings
    ENVIRONMENT: Environment = Field(
        Environment.DEVELOPMENT,
        alias="MERCURE_CLIENT_ENVIRONMENT",
        description="Application environment",
    )
    LOGGING_LEVEL: str = Field(
        "INFO",
        alias="MERCURE_CLIENT_LOGGING_LEVEL",
        description="Logging level",
    )

    # Mercure hub connection
    HUB_URL: str = Field(
        "https://localhost/.well-known/mercure",
        alias="MERCURE_CLIENT_HUB_URL",
        description="Mercure hub URL, must use the /.well-known/mercure path",
    )
    HTTP_TIMEOUT_SECONDS: float = Field(
        10.0,
        alias="MERCURE_CLIENT_HTTP_TIMEOUT_SECONDS",
        description="Timeout for requests to the Mercure hub",
    )

    # JWT configuration
    PUBLISHER_JWT_SECRET: Optional[SecretStr] = Field(
        None,
        alias="MERCURE_CLIENT_PUBLISHER_JWT_SECRET",
        description="HMAC secret used to sign publisher JWTs",
    )
    PUBLISHER_TOPIC_SELECTORS: List[str] = Field(
        default_factory=lambda: ["*"],
        alias="MERCURE_CLIENT_PUBLISHER_TOPIC_SELECTORS",
        description="Topic selectors granted to the publisher JWT",
    )
    SUBSCRIBER_JWT_SECRET: Optional[SecretStr] = Field(
        None,
        alias="MERCURE_CLIENT_SUBSCRIBER_JWT_SECRET",
        description="HMAC secret used to sign subscriber JWTs",
    )
    SUBSCRIBER_JWT_MAX_AGE_SECONDS: Optional[int] = Field(
        3600,
        alias="MERCURE_CLIENT_SUBSCRIBER_JWT_MAX_AGE_SECONDS",
        description="Lifetime of issued subscriber JWTs, \"null\" for no expiry",
    )

    @field_validator("LOGGING_LEVEL")
    def validate_logging_level(cls, v: str, info: Any) -> str:
        v = v.upper()
        if v not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown logging level: {v}")
        return v

    @field_validator("SUBSCRIBER_JWT_MAX_AGE_SECONDS")
    def validate_subscriber_jwt_max_age(cls, v: Optional[int], info: Any) -> Optional[int]:
        if v is not None and not 0 <= v <= MAX_AGE_LIMIT_SECONDS:
            raise ValueError(
                f"Subscriber JWT max age must be between 0 and {MAX_AGE_LIMIT_SECONDS} seconds"
            )
        return v

    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION

    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        return self.ENVIRONMENT == Environment.TESTING

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_parse_none_str="null",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Returns the client settings, cached for efficiency.
    """
    return Settings()
