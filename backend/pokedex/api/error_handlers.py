"""Error Handlers — map every failure to the one JSON error envelope.

Invariants:
    - Every error body has the shape {"error": {code, message, category,
      severity, timestamp, path, ...}} whichever handler produced it
    - PokedexError keeps its own status and envelope (to_response()), plus path
    - RequestValidationError → 400 VALIDATION_ERROR with per-field details
    - Anything else → 500 INTERNAL_ERROR; the exception text stays in the logs

Design Decisions:
    - Handlers are plain module functions wired by add_exception_handler, so
      tests can call them without an app
    - Log level follows the status: warning below 500, error from 500 up
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pokedex.core.errors import ErrorCategory, ErrorSeverity, PokedexError

logger = logging.getLogger(__name__)


def error_envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    path: str,
    **extra,
) -> dict:
    """Envelope for errors raised outside the PokedexError hierarchy."""
    body = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": path,
    }
    body.update(extra)
    return {"error": body}


async def handle_pokedex_error(request: Request, exc: PokedexError) -> JSONResponse:
    path = request.url.path
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(exc.message, extra={"error_code": exc.code, "path": path})
    content = exc.to_response()
    content["error"]["path"] = path
    return JSONResponse(status_code=exc.http_status, content=content)


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    path = request.url.path
    logger.warning(
        f"Rejected request parameters: {[d['field'] for d in details]}",
        extra={"error_code": "VALIDATION_ERROR", "path": path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, path,
            details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    path = request.url.path
    logger.error(
        f"Unhandled {type(exc).__name__}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, path,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the three handlers, most specific first."""
    app.add_exception_handler(PokedexError, handle_pokedex_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
