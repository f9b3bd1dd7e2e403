"""FastAPI application factory."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from inspectweb.control_plane.client import ControlPlaneClient
from inspectweb.core.config import Settings, get_settings
from inspectweb.core.logging import configure_logging, get_logger
from inspectweb.github.client import GitHubClient

configure_logging(get_settings().environment)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for startup and shutdown events."""
    start_time = datetime.now()
    logger.info(
        "app.startup",
        message="Inspect web starting up",
        timestamp=start_time.isoformat(),
        control_plane=app.state.control_plane.base_url,
    )

    from inspectweb.api.health import set_app_start_time

    set_app_start_time(start_time)

    yield

    await app.state.control_plane.aclose()
    await app.state.github.aclose()
    logger.info("app.shutdown", message="Inspect web shutting down gracefully")


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure all middleware in correct order."""
    # Last added = first executed: request id, then session cookie, then Sentry context
    from inspectweb.middleware.logging import RequestIDMiddleware
    from inspectweb.middleware.sentry import SentryContextMiddleware

    app.add_middleware(SentryContextMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret_key,
        max_age=14 * 24 * 60 * 60,
        https_only=settings.is_production,
        same_site="lax",
    )
    app.add_middleware(RequestIDMiddleware)


def _register_routers(app: FastAPI) -> None:
    """Register all API and frontend routers."""
    from inspectweb.api.auth import router as auth_router
    from inspectweb.api.health import router as health_router
    from inspectweb.api.repos import router as repos_router
    from inspectweb.api.routes import dashboard_router, sessions_pages_router
    from inspectweb.api.sessions import router as sessions_api_router

    app.include_router(health_router)
    app.include_router(auth_router)

    # JSON proxy
    app.include_router(sessions_api_router)
    app.include_router(repos_router)

    # Pages
    app.include_router(dashboard_router)
    app.include_router(sessions_pages_router)


def create_app(
    settings: Optional[Settings] = None,
    control_plane: Optional[ControlPlaneClient] = None,
    github: Optional[GitHubClient] = None,
) -> FastAPI:
    """Application factory. Clients can be injected for tests."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Inspect Web",
        description="Session list and control plane proxy",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.control_plane = control_plane or ControlPlaneClient.from_settings(settings)
    app.state.github = github or GitHubClient.from_settings(settings)

    from inspectweb.core.exception_handlers import register_exception_handlers
    from inspectweb.core.sentry import init_sentry

    init_sentry(settings)
    register_exception_handlers(app)
    _setup_middleware(app, settings)
    _register_routers(app)

    logger.info("app.configured", message="FastAPI application created successfully")

    return app


def run() -> None:
    """Development server entrypoint."""
    uvicorn.run(
        "inspectweb.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
