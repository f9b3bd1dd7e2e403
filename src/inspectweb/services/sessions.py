"""Session operations against the control plane.

Shared by the JSON proxy routes and the HTML pages. Every operation maps a
non-ok upstream response to UpstreamError (status and body relayed) and a
network or parse failure to TransportError with a fixed message.
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from inspectweb.control_plane.client import ControlPlaneClient
from inspectweb.core.credential import Credential
from inspectweb.core.errors import TransportError, upstream_error
from inspectweb.core.logging import get_logger
from inspectweb.models.session import Session, SessionCreateRequest

logger = get_logger(__name__)

LIST_FAILED = "Failed to fetch sessions"
GET_FAILED = "Failed to fetch session"
CREATE_FAILED = "Failed to create session"
DELETE_FAILED = "Failed to delete session"


async def _call(
    control_plane: ControlPlaneClient,
    credential: Credential,
    path: str,
    fallback: str,
    event: str,
    method: str = "GET",
    json: Optional[dict[str, Any]] = None,
) -> Any:
    try:
        response = await control_plane.fetch(path, credential, method=method, json=json)
        if not response.is_success:
            logger.info(event, path=path, status_code=response.status_code)
            raise upstream_error(response.status_code, response.text, fallback)
        return response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error(event, path=path, error=str(exc), exc_info=True)
        raise TransportError(fallback, details={"upstream_path": path}) from exc


async def list_sessions(control_plane: ControlPlaneClient, credential: Credential) -> Any:
    return await _call(control_plane, credential, "/sessions", LIST_FAILED, "sessions.list_failed")


async def get_session(
    control_plane: ControlPlaneClient, credential: Credential, session_id: str
) -> Any:
    return await _call(
        control_plane,
        credential,
        f"/sessions/{quote(session_id, safe='')}",
        GET_FAILED,
        "sessions.get_failed",
    )


async def create_session(
    control_plane: ControlPlaneClient,
    credential: Credential,
    request: SessionCreateRequest,
) -> Any:
    data = await _call(
        control_plane,
        credential,
        "/sessions",
        CREATE_FAILED,
        "sessions.create_failed",
        method="POST",
        json=request.to_upstream(),
    )
    logger.info(
        "sessions.created",
        repo=f"{request.repo_owner}/{request.repo_name}",
        model=request.model,
        session_id=data.get("sessionId") if isinstance(data, dict) else None,
    )
    return data


async def delete_session(
    control_plane: ControlPlaneClient, credential: Credential, session_id: str
) -> Any:
    data = await _call(
        control_plane,
        credential,
        f"/sessions/{quote(session_id, safe='')}",
        DELETE_FAILED,
        "sessions.delete_failed",
        method="DELETE",
    )
    logger.info("sessions.deleted", session_id=session_id)
    return data


def parse_sessions(payload: Any) -> list[Session]:
    """Sessions from a {"sessions": [...]} list payload; malformed items are skipped."""
    if not isinstance(payload, dict):
        return []

    sessions = []
    for item in payload.get("sessions") or []:
        try:
            sessions.append(Session.model_validate(item))
        except ValueError as exc:
            logger.warning("sessions.invalid_item", error=str(exc))
    return sessions
