"""Exception handlers producing the failure envelope."""

import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from ..exceptions import ErrorCode, GalleryException

logger = logging.getLogger(__name__)


async def gallery_exception_handler(request: Request, exc: GalleryException) -> JSONResponse:
    """
    Handle custom exceptions and return structured JSON responses.

    Args:
        request: FastAPI request object
        exc: GalleryException instance

    Returns:
        JSONResponse with the failure envelope
    """
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"GalleryException: {exc.error_code.value}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are a 400 with the first problem spelled out."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))

    logger.info("Request validation failed", extra={"path": request.url.path, "error": message})
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": message, "code": ErrorCode.VALIDATION_ERROR.value},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, tell the client nothing about internals."""
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error", "code": ErrorCode.INTERNAL_ERROR.value},
    )
