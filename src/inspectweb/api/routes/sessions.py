"""Session pages (HTML endpoints): new session form, detail view, delete."""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from inspectweb.api.auth import get_optional_credential
from inspectweb.api.utils import load_sidebar, require_page_credential, templates
from inspectweb.control_plane.client import ControlPlaneClient, get_control_plane
from inspectweb.core.credential import Credential
from inspectweb.core.errors import AppError
from inspectweb.core.logging import get_logger
from inspectweb.core.session_form import FormStatus, SessionFormState, submit_session_form
from inspectweb.github.client import GitHubClient, get_github
from inspectweb.models.model_options import DEFAULT_MODEL, MODEL_OPTIONS
from inspectweb.models.repo import Repo
from inspectweb.models.session import Session, SessionCreateRequest
from inspectweb.services import sessions as session_service

logger = get_logger(__name__)

router = APIRouter(prefix="/session", tags=["sessions-frontend"])


async def _fetch_repos(github: GitHubClient, credential: Credential) -> list[Repo]:
    try:
        return await github.list_repos(credential)
    except AppError as exc:
        logger.warning("new_session.repos_failed", code=exc.code, status_code=exc.status_code)
        return []


async def _render_form(
    request: Request,
    form: SessionFormState,
    credential: Credential,
    control_plane: ControlPlaneClient,
    github: GitHubClient,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    repos = await _fetch_repos(github, credential)
    sidebar = await load_sidebar(control_plane, credential)
    return templates.TemplateResponse(
        request,
        "sessions/new_session.html",
        {
            "credential": credential,
            "sidebar": sidebar,
            "form": form,
            "repos": repos,
            "models": MODEL_OPTIONS,
        },
        status_code=status_code,
    )


@router.get("/new", response_class=HTMLResponse)
async def new_session_form(
    request: Request,
    credential: Optional[Credential] = Depends(get_optional_credential),
    control_plane: ControlPlaneClient = Depends(get_control_plane),
    github: GitHubClient = Depends(get_github),
):
    """Form to create a new session."""
    credential = require_page_credential(credential)
    return await _render_form(request, SessionFormState(), credential, control_plane, github)


@router.post("/new", response_class=HTMLResponse)
async def new_session_submit(
    request: Request,
    repo: str = Form(""),
    title: str = Form(""),
    model: str = Form(DEFAULT_MODEL),
    credential: Optional[Credential] = Depends(get_optional_credential),
    control_plane: ControlPlaneClient = Depends(get_control_plane),
    github: GitHubClient = Depends(get_github),
):
    """Submit the form; success navigates to the new session."""
    credential = require_page_credential(credential)

    async def create(body: SessionCreateRequest):
        return await session_service.create_session(control_plane, credential, body)

    form = await submit_session_form(
        SessionFormState(repo=repo.strip(), title=title.strip(), model=model), create
    )
    if form.status is FormStatus.NAVIGATED:
        return RedirectResponse(url=f"/session/{form.session_id}", status_code=303)

    return await _render_form(
        request,
        form,
        credential,
        control_plane,
        github,
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@router.get("/{session_id}", response_class=HTMLResponse)
async def session_detail(
    request: Request,
    session_id: str,
    credential: Optional[Credential] = Depends(get_optional_credential),
    control_plane: ControlPlaneClient = Depends(get_control_plane),
):
    """Detail view of one session."""
    credential = require_page_credential(credential)

    session: Optional[Session] = None
    error = ""
    status_code = status.HTTP_200_OK
    try:
        payload = await session_service.get_session(control_plane, credential, session_id)
        session = Session.model_validate(payload.get("session", payload))
    except AppError as exc:
        error, status_code = exc.message, exc.status_code
    except (AttributeError, ValueError) as exc:
        logger.warning("session_detail.invalid_payload", session_id=session_id, error=str(exc))
        error, status_code = session_service.GET_FAILED, status.HTTP_502_BAD_GATEWAY

    sidebar = await load_sidebar(control_plane, credential, current_session_id=session_id)
    return templates.TemplateResponse(
        request,
        "sessions/detail.html",
        {
            "credential": credential,
            "sidebar": sidebar,
            "session": session,
            "session_id": session_id,
            "error": error,
        },
        status_code=status_code,
    )


@router.post("/{session_id}/delete")
async def session_delete(
    session_id: str,
    credential: Optional[Credential] = Depends(get_optional_credential),
    control_plane: ControlPlaneClient = Depends(get_control_plane),
):
    """Delete from the detail view and go back home."""
    credential = require_page_credential(credential)
    try:
        await session_service.delete_session(control_plane, credential, session_id)
    except AppError as exc:
        logger.warning("session_delete.failed", session_id=session_id, code=exc.code)
        return RedirectResponse(url=f"/session/{session_id}?deleted=0", status_code=303)
    return RedirectResponse(url="/", status_code=303)
