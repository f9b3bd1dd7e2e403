"""HTTP client for the external control plane that owns session state."""

from typing import Any, Optional

import httpx
from fastapi import Request

from inspectweb.core.config import Settings
from inspectweb.core.credential import Credential
from inspectweb.core.logging import get_logger

logger = get_logger(__name__)

USER_AGENT = "inspect-web/0.1.0"


class ControlPlaneClient:
    """
    Forwards requests to the control plane with the caller's bearer token.

    Responses come back raw: non-2xx statuses and transport failures are
    left for the caller to interpret. No retries.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ControlPlaneClient":
        return cls(settings.control_plane_url, timeout=settings.control_plane_timeout_seconds)

    async def fetch(
        self,
        path: str,
        credential: Credential,
        method: str = "GET",
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        """Send one request to base_url + path and return the response untouched."""
        logger.debug("control_plane.request", method=method, path=path)
        return await self._client.request(
            method,
            path,
            json=json,
            params=params,
            headers=credential.authorization,
        )

    async def ping(self) -> httpx.Response:
        """Unauthenticated health probe."""
        return await self._client.get("/health")

    async def aclose(self) -> None:
        await self._client.aclose()


def get_control_plane(request: Request) -> ControlPlaneClient:
    """Dependency returning the application's shared client."""
    return request.app.state.control_plane
