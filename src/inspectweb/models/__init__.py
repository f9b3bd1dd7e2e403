"""Domain models package."""

from inspectweb.models.model_options import DEFAULT_MODEL, MODEL_OPTIONS, ModelOption
from inspectweb.models.repo import Repo
from inspectweb.models.session import Session, SessionCreateRequest

__all__ = [
    "DEFAULT_MODEL",
    "MODEL_OPTIONS",
    "ModelOption",
    "Repo",
    "Session",
    "SessionCreateRequest",
]
