"""OAuth 2.0 protected resource metadata policy (RFC 9728).

Serves an operator-configured metadata document directly from the gateway.
If the document cannot be serialized the policy fails open and the request
continues as if the policy were not configured.
"""

import json
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

from app.core.logging import get_logger
from app.gateway.policy import (
    DirectResponse,
    HttpConstructionError,
    PassThrough,
    PolicyOutcome,
)
from app.schemas.oauth_protected_resource import OAuthProtectedResourceConfig

logger = get_logger("gateway.oauth_protected_resource")

METADATA_HEADERS: tuple[tuple[str, str], ...] = (
    ("content-type", "application/json"),
    ("cache-control", "public, max-age=3600"),
    ("access-control-allow-origin", "*"),
    ("access-control-allow-methods", "GET, OPTIONS"),
    ("access-control-allow-headers", "content-type"),
)

# RFC 7230 section 3.2.6
_HEADER_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_HEADER_VALUE_INVALID_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")


class OAuthProtectedResource:
    """Responds with the configured protected resource metadata document."""

    name = "oauth_protected_resource"
    headers: tuple[tuple[str, str], ...] = METADATA_HEADERS

    def __init__(self, metadata: Mapping[str, Any]) -> None:
        """Initialize the policy.

        Args:
            metadata: Ordered key-value pairs for the metadata response.
                Nested dicts and lists are copied, so later changes to the
                caller's objects are not seen.
        """
        memo: dict[int, Any] = {}
        self._metadata: dict[str, Any] = {
            key: _snapshot(value, memo) for key, value in metadata.items()
        }

    @classmethod
    def from_config(cls, config: OAuthProtectedResourceConfig) -> "OAuthProtectedResource":
        """Create the policy from a validated configuration."""
        return cls(config.metadata)

    @property
    def metadata(self) -> Mapping[str, Any]:
        """Read-only view of a copy of the configured metadata."""
        return MappingProxyType(_snapshot(self._metadata, {}))

    def apply(self, request: Request) -> PolicyOutcome:
        """Build the metadata response for a routed request.

        The request itself is not inspected.

        Returns:
            DirectResponse with the metadata document, or PassThrough if the
            metadata cannot be serialized.

        Raises:
            HttpConstructionError: If the response headers are invalid.
        """
        try:
            body = self._serialize()
        except Exception as e:
            logger.warning(
                "oauth_protected_resource_serialization_failed",
                path=request.scope.get("path"),
                error=str(e),
            )
            return PassThrough()

        return DirectResponse(response=self._build_response(body))

    def _serialize(self) -> str:
        """Pretty-print the metadata as JSON, keeping insertion order."""
        return json.dumps(
            self._metadata,
            indent=2,
            ensure_ascii=False,
            allow_nan=False,
        )

    def _build_response(self, body: str) -> Response:
        """Assemble the 200 response with the metadata headers."""
        for header_name, header_value in self.headers:
            _validate_header(header_name, header_value)

        try:
            return Response(
                content=body.encode("utf-8"),
                status_code=200,
                headers=dict(self.headers),
            )
        except (UnicodeEncodeError, ValueError) as e:
            msg = f"Failed to build metadata response: {e}"
            raise HttpConstructionError(msg) from e


def _validate_header(name: str, value: str) -> None:
    """Raise HttpConstructionError for a header that cannot go on the wire."""
    if not _HEADER_NAME_RE.fullmatch(name):
        msg = f"Invalid header name: {name!r}"
        raise HttpConstructionError(msg)
    if _HEADER_VALUE_INVALID_RE.search(value):
        msg = f"Invalid value for header {name!r}"
        raise HttpConstructionError(msg)
    try:
        value.encode("latin-1")
    except UnicodeEncodeError as e:
        msg = f"Header {name!r} is not latin-1 encodable"
        raise HttpConstructionError(msg) from e


def _snapshot(value: Any, memo: dict[int, Any]) -> Any:
    """Copy nested dicts and lists; other values are shared as-is.

    Only exact dict and list types are copied so a misbehaving value is not
    touched until serialization. Shared and cyclic references keep their shape.
    """
    if type(value) is dict:
        if id(value) in memo:
            return memo[id(value)]
        copied: dict[str, Any] = {}
        memo[id(value)] = copied
        for key, item in value.items():
            copied[key] = _snapshot(item, memo)
        return copied
    if type(value) is list:
        if id(value) in memo:
            return memo[id(value)]
        copied_list: list[Any] = []
        memo[id(value)] = copied_list
        copied_list.extend(_snapshot(item, memo) for item in value)
        return copied_list
    return value
