"""Error Handlers — every failure leaves the API in the AuroraError envelope.

Invariants:
    - AuroraError → its own status and to_response() body; 4xx logged as warning
    - RequestValidationError → ValidationError envelope plus per-field details
    - Exception (catch-all) → INTERNAL_ERROR envelope, never leaks internal details
    - Rejected request bodies are never logged: they may carry a password (senha)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from aurora_admin.core.errors import (
    AuroraError, ErrorCategory, ErrorContext, ErrorSeverity, ValidationError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(AuroraError, _handle_aurora_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)


def _error_json(exc: AuroraError, **extra_error_fields) -> JSONResponse:
    body = exc.to_response()
    body["error"].update(extra_error_fields)
    return JSONResponse(status_code=exc.http_status, content=body)


async def _handle_aurora_error(request: Request, exc: AuroraError) -> JSONResponse:
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{request.method} {request.url.path} failed: {exc.message}",
        extra={
            "error_code": exc.code, "path": request.url.path,
            "table": exc.context.table, "operation": exc.context.operation,
            "record_id": exc.context.record_id,
        },
    )
    return _error_json(exc)


async def _handle_request_validation(
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
    fields = [d["field"] for d in details]
    error = ValidationError(
        "Invalid request data",
        field=fields[0] if fields else "",
        context=ErrorContext(operation=request.method.lower()),
    )
    logger.warning(
        f"{request.method} {request.url.path} rejected: {', '.join(fields)}",
        extra={"error_code": error.code, "path": request.url.path},
    )
    return _error_json(error, details=details)


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"path": request.url.path},
    )
    error = AuroraError(
        "An unexpected error occurred", "INTERNAL_ERROR",
        ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
    )
    return _error_json(error)
