import logging
from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from app.errors import ErrorType, ERROR_STATUS_MAP

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Custom exception that services can raise."""

    def __init__(self, error_type: ErrorType, message: str):
        self.error_type = error_type
        self.message = message
        super().__init__(message)


async def app_exception_handler(_request: Request, exc: AppException) -> Response:
    """Global handler for AppException - converts to proper HTTP response."""
    status_code = ERROR_STATUS_MAP.get(exc.error_type, 500)
    if exc.error_type is ErrorType.NOT_FOUND:
        # Missing resources carry no error body
        return Response(status_code=status_code)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message}
    )


def format_validation_errors(errors) -> str:
    """Flatten pydantic errors into one readable line."""
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = error.get("msg", "Invalid value")
        messages.append(f"{field}: {msg}" if field else msg)
    return "; ".join(messages) or "Invalid request"


async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed input is a client error (400) with a readable message."""
    return JSONResponse(
        status_code=400,
        content={"detail": format_validation_errors(exc.errors())}
    )


async def generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled exceptions - returns 500."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )
