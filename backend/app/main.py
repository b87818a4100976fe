"""FastAPI application entry point."""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response

from app import __version__
from app.api.v1 import health
from app.core.config import Settings, get_settings
from app.core.logging import configure_logging, get_logger
from app.gateway import OAuthProtectedResource, PolicyPipeline
from app.schemas.oauth_protected_resource import (
    OAuthProtectedResourceConfig,
    load_oauth_protected_resource_config,
)

logger = get_logger("app.main")


def build_policy_pipeline(settings: Settings) -> PolicyPipeline | None:
    """Build the policy pipeline from settings.

    A config file takes precedence over inline metadata. Returns None when
    neither is configured.
    """
    if settings.oauth_protected_resource_config_file is not None:
        config = load_oauth_protected_resource_config(settings.oauth_protected_resource_config_file)
    elif settings.oauth_protected_resource_metadata is not None:
        config = OAuthProtectedResourceConfig(metadata=settings.oauth_protected_resource_metadata)
    else:
        return None

    return PolicyPipeline([OAuthProtectedResource.from_config(config)])


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the gateway application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)

    pipeline = build_policy_pipeline(settings)
    policy_path = settings.oauth_protected_resource_path

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.policy_pipeline = pipeline

    @app.middleware("http")
    async def policy_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if pipeline is not None and request.url.path == policy_path:
            response = pipeline.run(request)
            if response is not None:
                return response
        return await call_next(request)

    app.include_router(health.router, tags=["health"])
    app.include_router(health.router, prefix="/api/v1", tags=["health"])

    logger.info(
        "app_created",
        environment=settings.environment,
        policy_path=policy_path,
        oauth_protected_resource=pipeline is not None,
    )
    return app


def run() -> None:
    """Run the gateway with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        reload=settings.reload,
        log_config=None,
    )
