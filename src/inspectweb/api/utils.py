"""Template setup and helpers shared by the HTML routes."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from fastapi import HTTPException, status
from fastapi.templating import Jinja2Templates

from inspectweb.control_plane.client import ControlPlaneClient
from inspectweb.core.credential import Credential
from inspectweb.core.errors import AppError
from inspectweb.core.logging import get_logger
from inspectweb.core.session_list import SessionListView, reconcile_sessions
from inspectweb.models.session import Session
from inspectweb.services import sessions as session_service
from inspectweb.utils.datetime import format_relative_time, now_ms

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["relative_time"] = format_relative_time


@dataclass
class Sidebar:
    """Everything the sidebar partial renders."""

    view: SessionListView = field(default_factory=lambda: SessionListView([], []))
    total: int = 0
    query: str = ""
    current_session_id: Optional[str] = None
    now: int = field(default_factory=now_ms)


def require_page_credential(credential: Optional[Credential]) -> Credential:
    """Pages send signed-out visitors back to the home page."""
    if credential is None:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail="Not signed in",
            headers={"Location": "/"},
        )
    return credential


async def fetch_sessions(
    control_plane: ControlPlaneClient, credential: Credential
) -> list[Session]:
    """Session list for display; a failed fetch renders as an empty list."""
    try:
        payload = await session_service.list_sessions(control_plane, credential)
    except AppError as exc:
        logger.warning("sidebar.fetch_failed", code=exc.code, status_code=exc.status_code)
        return []
    return session_service.parse_sessions(payload)


async def load_sidebar(
    control_plane: ControlPlaneClient,
    credential: Optional[Credential],
    query: str = "",
    current_session_id: Optional[str] = None,
) -> Sidebar:
    if credential is None:
        return Sidebar(query=query, current_session_id=current_session_id)

    sessions = await fetch_sessions(control_plane, credential)
    now = now_ms()
    return Sidebar(
        view=reconcile_sessions(sessions, query, now=now),
        total=len(sessions),
        query=query,
        current_session_id=current_session_id,
        now=now,
    )
