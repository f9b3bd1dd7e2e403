"""New session form: local validation, submission and outcome."""

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from inspectweb.core.errors import AppError, UpstreamError
from inspectweb.core.logging import get_logger
from inspectweb.models.model_options import DEFAULT_MODEL, is_known_model
from inspectweb.models.session import SessionCreateRequest

logger = get_logger(__name__)

SELECT_REPO_MESSAGE = "Please select a repository"
CREATE_FAILED_MESSAGE = "Failed to create session"

CreateSession = Callable[[SessionCreateRequest], Awaitable[Any]]


class FormStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    NAVIGATED = "navigated"


@dataclass(frozen=True)
class SessionFormState:
    """Values entered in the form plus where the submission stands."""

    repo: str = ""
    title: str = ""
    model: str = DEFAULT_MODEL
    status: FormStatus = FormStatus.IDLE
    error: str = ""
    session_id: Optional[str] = None

    @property
    def can_submit(self) -> bool:
        return bool(self.repo) and self.status is FormStatus.IDLE


def server_error_message(exc: UpstreamError) -> str:
    """The "error" field of a JSON error body, else the raw body text."""
    try:
        body = json.loads(exc.message)
    except ValueError:
        return exc.message
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return exc.message


def _failed(state: SessionFormState, message: str) -> SessionFormState:
    return replace(state, status=FormStatus.IDLE, error=message, session_id=None)


async def submit_session_form(state: SessionFormState, create: CreateSession) -> SessionFormState:
    """
    Run one submission. Returns the next state.

    Without a repository the form goes back to idle with a validation
    message and `create` is never called. Any failure returns to idle so
    the form can be submitted again.
    """
    if state.status is not FormStatus.IDLE:
        return state

    if not state.repo:
        return _failed(state, SELECT_REPO_MESSAGE)

    owner, _, name = state.repo.partition("/")
    model = state.model if is_known_model(state.model) else DEFAULT_MODEL
    try:
        request = SessionCreateRequest(
            repo_owner=owner,
            repo_name=name,
            title=state.title or None,
            model=model,
        )
    except PydanticValidationError:
        return _failed(state, SELECT_REPO_MESSAGE)

    submitting = replace(state, status=FormStatus.SUBMITTING, error="")
    try:
        data = await create(request)
    except UpstreamError as exc:
        return _failed(submitting, server_error_message(exc))
    except AppError as exc:
        logger.warning("session_form.create_failed", code=exc.code)
        return _failed(submitting, CREATE_FAILED_MESSAGE)

    session_id = data.get("sessionId") if isinstance(data, dict) else None
    if not session_id:
        logger.warning("session_form.missing_session_id")
        return _failed(submitting, CREATE_FAILED_MESSAGE)

    return replace(submitting, status=FormStatus.NAVIGATED, session_id=str(session_id))
