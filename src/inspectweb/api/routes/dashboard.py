"""Home page and the sidebar partial."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from inspectweb.api.auth import get_optional_credential
from inspectweb.api.utils import load_sidebar, templates
from inspectweb.control_plane.client import ControlPlaneClient, get_control_plane
from inspectweb.core.credential import Credential

router = APIRouter(tags=["frontend"])


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    error: Optional[str] = Query(None),
    credential: Optional[Credential] = Depends(get_optional_credential),
    control_plane: ControlPlaneClient = Depends(get_control_plane),
):
    """Sidebar plus a prompt to start a session, or the sign-in form."""
    sidebar = await load_sidebar(control_plane, credential)
    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "credential": credential,
            "sidebar": sidebar,
            "signin_error": bool(error),
        },
    )


@router.get("/sidebar", response_class=HTMLResponse)
async def sidebar_partial(
    request: Request,
    q: str = Query("", max_length=200),
    current: Optional[str] = Query(None),
    credential: Optional[Credential] = Depends(get_optional_credential),
    control_plane: ControlPlaneClient = Depends(get_control_plane),
):
    """Session list re-rendered for a search; swapped in by HTMX."""
    sidebar = await load_sidebar(control_plane, credential, query=q, current_session_id=current)
    return templates.TemplateResponse(
        request,
        "partials/session_list.html",
        {"credential": credential, "sidebar": sidebar},
    )
