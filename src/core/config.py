"""
Core configuration module for Chat Gateway.

This module provides centralized configuration management using Pydantic Settings.
Configuration is loaded from environment variables with the CHAT_GATEWAY_ prefix
and can be overridden by command-line flags at startup (see src.main).

The Settings instance is frozen: once built at startup it is shared read-only
by every request handler. The optional fallback API key lives here.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings


DEFAULT_PORT = 10802
DEFAULT_MODEL = "gpt-3.5-turbo"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All fields use the CHAT_GATEWAY_ prefix for environment variables.
    Example: CHAT_GATEWAY_PORT=8080

    The model is frozen so that the fallback credential is write-once:
    it is fixed when the settings object is constructed and never changes.
    """

    # =========================================================================
    # Service Configuration
    # =========================================================================
    service_name: str = Field(
        default="chat-gateway",
        description="Name of the service for logging and identification",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Interface the listener binds to",
    )
    port: int = Field(
        default=DEFAULT_PORT,
        ge=0,
        le=65535,
        description="Port the service listens on",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # =========================================================================
    # Upstream Configuration
    # Pattern: SecretStr for sensitive values, masked in logs/repr.
    # Use .get_secret_value() to access.
    # =========================================================================
    api_key: Optional[SecretStr] = Field(
        default=None,
        description="Fallback API key used when a request carries none",
    )
    model: str = Field(
        default=DEFAULT_MODEL,
        description="Upstream chat-completion model identifier",
    )
    openai_base_url: Optional[str] = Field(
        default=None,
        description="Optional custom upstream endpoint (proxies, compatible APIs)",
    )

    model_config = {
        "env_prefix": "CHAT_GATEWAY_",
        "case_sensitive": False,
        "extra": "ignore",
        "frozen": True,
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("api_key", mode="before")
    @classmethod
    def empty_api_key_is_unset(cls, v: object) -> object:
        """Treat an empty key the same as no key at all."""
        if v is None:
            return None
        raw = v.get_secret_value() if isinstance(v, SecretStr) else v
        if raw == "":
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {LOG_LEVELS}")
        return level

    @property
    def has_fallback_api_key(self) -> bool:
        """Whether a process-wide fallback credential was configured."""
        return self.api_key is not None


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created
    from the environment. The CLI builds its own instance with flag overrides
    and passes it to the app factory explicitly.

    Returns:
        Settings: The application settings instance.
    """
    return Settings()
