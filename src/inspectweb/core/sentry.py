"""Sentry error tracking configuration and initialization."""

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.utils import BadDsn

from inspectweb.core.config import Settings
from inspectweb.core.logging import get_logger

logger = get_logger(__name__)

_sentry_initialized = False

SENSITIVE_HEADERS = {"authorization", "cookie", "x-github-token"}
SENSITIVE_KEYS = ("token", "secret", "authorization")


def init_sentry(settings: Settings) -> bool:
    """
    Initialize Sentry SDK for error tracking.

    Only initializes if SENTRY_DSN is set and looks like a URL, so local
    development and CI run without error tracking. Safe to call repeatedly.

    Configuration:
    - Performance monitoring off
    - No default PII; bearer tokens and cookies scrubbed in before_send
    - Logging integration off to avoid duplicating structlog output
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True

    sentry_dsn = (settings.sentry_dsn or "").strip()
    if not sentry_dsn:
        logger.info("sentry.disabled", message="Sentry DSN not found, error tracking disabled")
        return False

    if not sentry_dsn.startswith(("https://", "http://")):
        logger.info(
            "sentry.disabled",
            message="Sentry DSN appears to be invalid or placeholder, error tracking disabled",
            dsn_preview=sentry_dsn[:20] + "..." if len(sentry_dsn) > 20 else sentry_dsn,
        )
        return False

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.0,
            send_default_pii=False,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                LoggingIntegration(level=None, event_level=None),
            ],
            before_send=scrub_credentials,
        )
    except BadDsn as exc:
        logger.warning(
            "sentry.init_failed",
            message="Failed to initialize Sentry due to invalid DSN, error tracking disabled",
            error=str(exc),
        )
        return False

    _sentry_initialized = True
    logger.info(
        "sentry.initialized",
        message="Sentry error tracking enabled",
        environment=settings.environment,
    )
    return True


def scrub_credentials(event: dict, hint: dict) -> dict:
    """Remove bearer tokens, cookies and token-like extras from a Sentry event."""
    request = event.get("request")
    if isinstance(request, dict):
        headers = request.get("headers")
        if isinstance(headers, dict):
            request["headers"] = {
                key: ("[Filtered]" if key.lower() in SENSITIVE_HEADERS else value)
                for key, value in headers.items()
            }
        request.pop("cookies", None)

    extra = event.get("extra")
    if isinstance(extra, dict):
        event["extra"] = {
            key: value
            for key, value in extra.items()
            if not any(marker in str(key).lower() for marker in SENSITIVE_KEYS)
        }

    return event
