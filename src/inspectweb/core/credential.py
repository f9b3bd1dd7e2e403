"""Caller credential threaded through request handling."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Credential:
    """Caller identity passed explicitly into every control-plane and GitHub call."""

    access_token: str
    login: Optional[str] = None
    name: Optional[str] = None
    avatar_url: Optional[str] = None

    @property
    def initial(self) -> str:
        label = self.name or self.login or ""
        return label[:1].upper() or "?"

    @property
    def authorization(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}
