"""
Application-wide exception handlers.

Endpoints translate service errors themselves; the handlers here cover
what falls through.  Malformed request bodies or query parameters are
reported as ``400`` with the same ``{"detail": ...}`` shape as every
other client error, and unexpected exceptions are logged with their
traceback and answered with a generic ``500`` that reveals nothing
about the internals.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as a plain 400."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        detail = f"{location}: {message}" if location else message
    else:
        detail = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log any unhandled exception and return a generic error body."""
    logger.error(
        "Unhandled exception in %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Something went wrong"},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the handlers above with the application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
