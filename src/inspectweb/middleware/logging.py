"""Request ID injection and access logging."""

import time
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from inspectweb.core.logging import get_logger, set_request_id

REQUEST_ID_HEADER = b"x-request-id"


def read_request_id(scope: Scope) -> str:
    """Incoming X-Request-ID (latin-1, like all header values), else a new UUID."""
    for name, value in scope.get("headers", []):
        if name.lower() == REQUEST_ID_HEADER and value:
            return value.decode("latin-1")
    return str(uuid.uuid4())


def access_log_level(status_code: int) -> str:
    """5xx logs as error, 4xx as warning, everything else as info."""
    if status_code >= 500:
        return "error"
    if status_code >= 400:
        return "warning"
    return "info"


class RequestIDMiddleware:
    """
    Tag every request with an ID and log one access line per response.

    The ID is echoed back in the X-Request-ID response header and bound
    into the structlog context for every log line of the request. Proxy
    failures (401 without a credential, relayed upstream errors, transport
    500s) surface here at warning/error level.
    """

    def __init__(self, app: ASGIApp):
        self.app = app
        self.logger = get_logger(__name__)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = read_request_id(scope)
        set_request_id(request_id)
        started = time.perf_counter()

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                message["headers"] = headers

                status_code = message.get("status", 500)
                log = getattr(self.logger, access_log_level(status_code))
                log(
                    "request.complete",
                    method=scope["method"],
                    path=scope["path"],
                    status_code=status_code,
                    duration_ms=int((time.perf_counter() - started) * 1000),
                )

            await send(message)

        await self.app(scope, receive, send_with_request_id)
