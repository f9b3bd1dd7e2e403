"""Credential context, sign-in and sign-out endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from inspectweb.core.credential import Credential
from inspectweb.core.errors import TransportError, UnauthorizedError, UpstreamError
from inspectweb.core.logging import get_logger
from inspectweb.github.client import GitHubClient, get_github

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


def get_optional_credential(request: Request) -> Optional[Credential]:
    """Credential from the signed session cookie, else from a Bearer header."""
    session = request.scope.get("session") or {}
    token = session.get("access_token")
    if token:
        return Credential(
            access_token=token,
            login=session.get("login"),
            name=session.get("name"),
            avatar_url=session.get("avatar_url"),
        )

    token = _bearer_token(request)
    if token:
        return Credential(access_token=token)
    return None


def get_credential(
    credential: Optional[Credential] = Depends(get_optional_credential),
) -> Credential:
    """Dependency for API routes: no credential means 401 before any I/O."""
    if credential is None:
        raise UnauthorizedError()
    return credential


@router.post("/signin")
async def signin(
    request: Request,
    token: str = Form(""),
    github: GitHubClient = Depends(get_github),
):
    """Verify a GitHub token and store it with the user's profile in the session."""
    token = token.strip()
    if not token:
        return RedirectResponse(url="/?error=1", status_code=302)

    try:
        user = await github.get_user(Credential(access_token=token))
    except (UpstreamError, TransportError) as exc:
        logger.warning("auth.signin_failed", code=exc.code, status_code=exc.status_code)
        return RedirectResponse(url="/?error=1", status_code=302)

    request.session["access_token"] = token
    request.session["login"] = user.get("login")
    request.session["name"] = user.get("name") or user.get("login")
    request.session["avatar_url"] = user.get("avatar_url")

    logger.info("auth.signin_success", login=user.get("login"))
    return RedirectResponse(url="/", status_code=302)


@router.post("/signout")
async def signout(request: Request):
    """Clear the session."""
    login = request.session.get("login")
    if login:
        logger.info("auth.signout", login=login)

    request.session.clear()
    return RedirectResponse(url="/", status_code=302)


@router.get("/signout")
async def signout_get(request: Request):
    """Sign-out GET endpoint for browser compatibility."""
    return await signout(request)
