"""Custom exceptions and error response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Error body returned by every JSON endpoint."""

    error: str = Field(..., description="Human-readable error message")


class AppError(Exception):
    """Base exception for all app-level errors."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> ErrorDetail:
        """Convert to API response schema."""
        return ErrorDetail(error=self.message)


class UnauthorizedError(AppError):
    """Raised when no credential was presented. Fails before any I/O."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=401,
        )


class UpstreamError(AppError):
    """Non-2xx response from the control plane or GitHub, relayed as-is."""

    def __init__(self, status_code: int, message: str, details: Optional[dict] = None):
        super().__init__(
            code="UPSTREAM_ERROR",
            message=message,
            status_code=status_code,
            details=details,
        )


class TransportError(AppError):
    """Network or parse failure. The message is fixed; the cause is only logged."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="TRANSPORT_ERROR",
            message=message,
            status_code=500,
            details=details,
        )


class ValidationError(AppError):
    """Raised when request validation fails."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=422,
            details=details,
        )


def upstream_error(status_code: int, body: str, fallback: str) -> UpstreamError:
    """Relay a non-ok upstream response: its status and body text, or the fallback."""
    return UpstreamError(status_code=status_code, message=body or fallback)
