"""Gateway module - policy runtime for routed requests."""

from app.gateway.oauth_protected_resource import METADATA_HEADERS, OAuthProtectedResource
from app.gateway.pipeline import PolicyPipeline
from app.gateway.policy import (
    DirectResponse,
    HttpConstructionError,
    PassThrough,
    Policy,
    PolicyFilterError,
    PolicyOutcome,
)

__all__ = [
    "METADATA_HEADERS",
    "DirectResponse",
    "HttpConstructionError",
    "OAuthProtectedResource",
    "PassThrough",
    "Policy",
    "PolicyFilterError",
    "PolicyOutcome",
    "PolicyPipeline",
]
