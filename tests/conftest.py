"""Pytest configuration and fixtures."""

from typing import Any, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from inspectweb.control_plane.client import ControlPlaneClient
from inspectweb.core.config import Settings
from inspectweb.github.client import GitHubClient
from inspectweb.main import create_app

BASE_URL = "http://inspect.test"
CONTROL_PLANE_URL = "http://control-plane.test"
GITHUB_API_URL = "http://github.test"
TEST_TOKEN = "gho_test_token"


class FakeUpstream:
    """
    Stand-in for an external HTTP service, served through httpx.MockTransport.

    Routes are keyed by (method, path). Unrouted requests get a 404 with body
    "not found". Every request is recorded for assertions.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.requests: list[httpx.Request] = []

    def respond(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json: Any = None,
        text: Optional[str] = None,
    ) -> None:
        if text is not None:
            self.routes[(method, path)] = httpx.Response(status_code, text=text)
        else:
            self.routes[(method, path)] = httpx.Response(status_code, json=json)

    def fail(self, method: str, path: str, exc_type: type = httpx.ConnectError) -> None:
        self.routes[(method, path)] = exc_type

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, type):
            raise route("upstream unreachable", request=request)
        return route

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def control_plane() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def github_api() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        control_plane_url=CONTROL_PLANE_URL,
        github_api_url=GITHUB_API_URL,
        session_secret_key="test-secret",
        environment="test",
    )


@pytest.fixture
def app(settings: Settings, control_plane: FakeUpstream, github_api: FakeUpstream):
    return create_app(
        settings=settings,
        control_plane=ControlPlaneClient(CONTROL_PLANE_URL, transport=control_plane.transport),
        github=GitHubClient(GITHUB_API_URL, transport=github_api.transport),
    )


@pytest_asyncio.fixture
async def client(app) -> AsyncClient:
    """Client presenting a bearer credential on every request."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=BASE_URL,
        headers={"Authorization": f"Bearer {TEST_TOKEN}"},
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def unauthenticated_client(app) -> AsyncClient:
    """Client without any credential (for testing auth failures)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        yield ac
