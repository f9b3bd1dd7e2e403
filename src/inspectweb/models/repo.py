"""Repository references sourced from the GitHub REST API."""

from typing import Any, Optional

from inspectweb.models.session import CamelModel


class Repo(CamelModel):
    """A repository the signed-in user can start sessions against."""

    id: int
    full_name: str
    owner: str
    name: str
    description: Optional[str] = None
    private: bool = False

    @classmethod
    def from_github(cls, payload: dict[str, Any]) -> "Repo":
        """Map a GitHub /user/repos item."""
        return cls(
            id=payload["id"],
            full_name=payload["full_name"],
            owner=payload["owner"]["login"],
            name=payload["name"],
            description=payload.get("description"),
            private=bool(payload.get("private", False)),
        )
