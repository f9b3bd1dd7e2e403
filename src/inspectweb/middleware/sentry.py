"""Sentry context middleware to capture request context in error reports."""

import uuid

import sentry_sdk
from starlette.types import ASGIApp, Receive, Scope, Send

from inspectweb.core.logging import get_request_id


class SentryContextMiddleware:
    """
    Inject request context into Sentry error reports.

    Captures:
    - request_id: Unique request identifier
    - user: GitHub login of the signed-in user (if available)
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = None
        for name, value in scope.get("headers", []):
            if name.lower() == b"x-request-id":
                request_id = value.decode("latin1")
                break
        if not request_id:
            request_id = get_request_id()
        if not request_id or request_id == "no-request-id":
            request_id = str(uuid.uuid4())

        # SessionMiddleware runs first, so the signed cookie is already decoded
        session = scope.get("session") or {}
        login = session.get("login")

        sentry_sdk.set_tag("request_id", request_id)
        if login:
            sentry_sdk.set_user({"username": login})

        sentry_sdk.set_context(
            "request",
            {
                "method": scope.get("method"),
                "path": scope.get("path"),
                "request_id": request_id,
            },
        )

        await self.app(scope, receive, send)
