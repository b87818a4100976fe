"""Pydantic schemas for the OAuth protected resource metadata policy."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel


class ConfigError(Exception):
    """Raised when a policy configuration document cannot be loaded."""


class OAuthProtectedResourceConfig(BaseModel):
    """Configuration for the OAuth 2.0 protected resource metadata policy.

    Values under ``metadata`` are passed through untouched and served in
    insertion order.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    metadata: dict[str, Any] = Field(
        ...,
        description="Key-value pairs to include in the OAuth 2.0 resource server metadata response",
    )


def load_oauth_protected_resource_config(path: Path) -> OAuthProtectedResourceConfig:
    """Load and validate a policy configuration from a JSON file.

    Raises ConfigError if the file is missing, unreadable, not JSON, or
    fails validation.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Cannot read policy config {path}: {e}"
        raise ConfigError(msg) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in policy config {path}: {e}"
        raise ConfigError(msg) from e

    try:
        return OAuthProtectedResourceConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid policy config {path}: {e}"
        raise ConfigError(msg) from e
