"""Global exception handlers for FastAPI."""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inspectweb.core.errors import AppError, ErrorDetail, ValidationError
from inspectweb.core.logging import get_logger

logger = get_logger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Handle all AppError exceptions and convert to JSON response.

    Returns the error body shared by every endpoint:
    {
        "error": "not found"
    }
    """
    if exc.status_code >= 500:
        logger.error(
            "app_error",
            code=exc.code,
            status_code=exc.status_code,
            path=request.url.path,
            **exc.details,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI body/query validation failures in the {"error": ...} shape."""
    errors = exc.errors()
    field = ""
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"

    error = ValidationError(message, details={"field": field, "error_count": len(errors)})
    logger.info("request.invalid", path=request.url.path, error=message, **error.details)
    return await app_error_handler(request, error)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with redirect support for unauthenticated pages."""

    if (
        exc.status_code == status.HTTP_303_SEE_OTHER
        and exc.headers
        and "Location" in exc.headers
    ):
        return RedirectResponse(url=exc.headers["Location"], status_code=303)

    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorDetail(error=str(exc.detail)).model_dump(),
    )


def register_exception_handlers(app) -> None:
    """Register all custom exception handlers with FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
