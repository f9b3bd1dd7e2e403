"""Session API proxy: authenticate the caller, forward, relay the result."""

from typing import Any

from fastapi import APIRouter, Depends

from inspectweb.api.auth import get_credential
from inspectweb.control_plane.client import ControlPlaneClient, get_control_plane
from inspectweb.core.credential import Credential
from inspectweb.models.session import SessionCreateRequest
from inspectweb.services import sessions as session_service

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.get("")
async def list_sessions(
    credential: Credential = Depends(get_credential),
    control_plane: ControlPlaneClient = Depends(get_control_plane),
) -> Any:
    """Relay the control plane's session list."""
    return await session_service.list_sessions(control_plane, credential)


@router.post("")
async def create_session(
    body: SessionCreateRequest,
    credential: Credential = Depends(get_credential),
    control_plane: ControlPlaneClient = Depends(get_control_plane),
) -> Any:
    """Create a session; the upstream body carries the new sessionId."""
    return await session_service.create_session(control_plane, credential, body)


@router.get("/{session_id}")
async def get_session(
    session_id: str,
    credential: Credential = Depends(get_credential),
    control_plane: ControlPlaneClient = Depends(get_control_plane),
) -> Any:
    return await session_service.get_session(control_plane, credential, session_id)


@router.delete("/{session_id}")
async def delete_session(
    session_id: str,
    credential: Credential = Depends(get_credential),
    control_plane: ControlPlaneClient = Depends(get_control_plane),
) -> Any:
    """
    Delete a session.

    - 401 {"error": "Unauthorized"} without a credential, nothing forwarded
    - upstream non-ok: upstream status, {"error": <body or fallback>}
    - transport failure: 500 {"error": "Failed to delete session"}
    """
    return await session_service.delete_session(control_plane, credential, session_id)
