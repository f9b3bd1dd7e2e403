"""GitHub REST client for the signed-in user's profile and repositories."""

from typing import Any, Optional

import httpx
from fastapi import Request

from inspectweb.core.config import Settings
from inspectweb.core.credential import Credential
from inspectweb.core.errors import TransportError, upstream_error
from inspectweb.core.logging import get_logger
from inspectweb.models.repo import Repo

logger = get_logger(__name__)

GITHUB_ACCEPT = "application/vnd.github+json"
REPOS_PER_PAGE = 100


class GitHubClient:
    """Read-only access to the code-hosting API on behalf of the caller."""

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "Accept": GITHUB_ACCEPT,
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "inspect-web/0.1.0",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "GitHubClient":
        return cls(settings.github_api_url, timeout=settings.github_timeout_seconds)

    async def _get(self, path: str, credential: Credential, fallback: str, **params: Any) -> Any:
        try:
            response = await self._client.get(
                path, params=params or None, headers=credential.authorization
            )
            if not response.is_success:
                raise upstream_error(response.status_code, response.text, fallback)
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("github.request_failed", path=path, error=str(exc), exc_info=True)
            raise TransportError(fallback, details={"upstream_path": path}) from exc

    async def get_user(self, credential: Credential) -> dict[str, Any]:
        """Profile of the token's owner (login, name, avatar_url)."""
        return await self._get("/user", credential, "Failed to fetch user")

    async def list_repos(self, credential: Credential) -> list[Repo]:
        """Repositories visible to the caller, most recently updated first."""
        payload = await self._get(
            "/user/repos",
            credential,
            "Failed to fetch repositories",
            per_page=REPOS_PER_PAGE,
            sort="updated",
        )
        try:
            return [Repo.from_github(item) for item in payload]
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("github.unexpected_payload", error=str(exc))
            raise TransportError(
                "Failed to fetch repositories", details={"upstream_path": "/user/repos"}
            ) from exc

    async def aclose(self) -> None:
        await self._client.aclose()


def get_github(request: Request) -> GitHubClient:
    """Dependency returning the application's shared GitHub client."""
    return request.app.state.github
