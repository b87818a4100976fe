"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

from app.core.config import Settings
from app.main import create_app

WELL_KNOWN_PATH = "/.well-known/oauth-protected-resource"


def make_request(path: str = WELL_KNOWN_PATH, method: str = "GET") -> Request:
    """Build a bare request as the routing layer would hand it over."""
    return Request(
        {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": b"",
            "headers": [(b"host", b"gateway.test")],
        }
    )


@pytest.fixture
def metadata() -> dict[str, Any]:
    """A typical protected resource metadata document."""
    return {
        "resource": "https://api.example.com",
        "authorization_servers": ["https://auth.example.com"],
        "scopes_supported": ["read", "write"],
        "bearer_methods_supported": ["header"],
    }


@pytest.fixture
def settings(metadata: dict[str, Any]) -> Settings:
    """Settings with inline metadata and console logging."""
    return Settings(
        _env_file=None,
        log_format="console",
        oauth_protected_resource_metadata=metadata,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Gateway application built from the test settings."""
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for the gateway."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def sync_client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create a synchronous test client for the gateway."""
    with TestClient(app) as tc:
        yield tc
