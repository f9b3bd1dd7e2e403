"""Pydantic schemas for sessions mirrored from the control plane."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from inspectweb.models.model_options import DEFAULT_MODEL


class CamelModel(BaseModel):
    """Base schema speaking the control plane's camelCase wire format."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Session(CamelModel):
    """Read-only copy of a control-plane session.

    Timestamps are milliseconds since the Unix epoch.
    """

    id: str
    title: Optional[str] = None
    repo_owner: str
    repo_name: str
    status: str = ""
    created_at: int = 0
    updated_at: Optional[int] = None

    @property
    def repo_full_name(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"

    @property
    def display_title(self) -> str:
        """Title shown in lists; falls back to owner/name so it is never blank."""
        return self.title or self.repo_full_name

    @property
    def effective_timestamp(self) -> int:
        """updatedAt if present, else createdAt."""
        return self.updated_at or self.created_at


class SessionCreateRequest(CamelModel):
    """Body of POST /api/sessions."""

    repo_owner: str = Field(..., min_length=1, max_length=100)
    repo_name: str = Field(..., min_length=1, max_length=100)
    title: Optional[str] = Field(None, max_length=200)
    model: str = DEFAULT_MODEL

    @field_validator("repo_owner", "repo_name")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("title")
    @classmethod
    def blank_title_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("model")
    @classmethod
    def default_blank_model(cls, v: str) -> str:
        return v.strip() or DEFAULT_MODEL

    def to_upstream(self) -> dict:
        """Control plane body; title is omitted when not given."""
        return self.model_dump(by_alias=True, exclude_none=True)
