"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "OAuth Resource Gateway"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1
    reload: bool = False

    # OAuth protected resource metadata (RFC 9728)
    oauth_protected_resource_path: str = "/.well-known/oauth-protected-resource"
    oauth_protected_resource_config_file: Path | None = None  # JSON: {"metadata": {...}}
    oauth_protected_resource_metadata: dict[str, Any] | None = None  # Used when no file is set

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            msg = f"Invalid log level: {v}. Must be one of {allowed}"
            raise ValueError(msg)
        return v_upper

    @field_validator("oauth_protected_resource_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Require an absolute request path."""
        if not v.startswith("/"):
            msg = f"Invalid path: {v}. Must start with '/'"
            raise ValueError(msg)
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
