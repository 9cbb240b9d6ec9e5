"""Error Hierarchy — typed, categorized exceptions for all Aurora Admin failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - Backend messages are surfaced through context.user_message, never stack traces

Design Decisions:
    - Single hierarchy with AuroraError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    AUTHENTICATION = "authentication"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    table: str | None = None
    operation: str | None = None
    record_id: str | None = None
    user_message: str | None = None


class AuroraError(Exception):
    """Base exception for all Aurora Admin errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "table": self.context.table,
                    "operation": self.context.operation,
                    "record_id": self.context.record_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(AuroraError):
    """Request data rejected before reaching the backend."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(AuroraError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.record_id = ctx.record_id or resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class AmbiguousResourceError(AuroraError):
    """A lookup expected to match one record matched several."""
    def __init__(
        self, resource_type: str, lookup_key: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.record_id = ctx.record_id or lookup_key
        super().__init__(
            f"More than one {resource_type} found for '{lookup_key}'",
            "RESOURCE_AMBIGUOUS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

# Postgres SQLSTATE class 23: integrity constraint violation.
_INTEGRITY_VIOLATION_PREFIX = "23"


class BackendAPIError(AuroraError):
    """Hosted table API rejected or failed a request."""
    def __init__(
        self,
        message: str,
        operation: str,
        backend_code: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        ctx.user_message = ctx.user_message or message
        is_conflict = bool(backend_code) and backend_code.startswith(
            _INTEGRITY_VIOLATION_PREFIX,
        )
        super().__init__(
            f"Backend {operation} failed: {message}",
            "BACKEND_CONFLICT" if is_conflict else "BACKEND_API_ERROR",
            ErrorCategory.CONFLICT if is_conflict else ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR if is_conflict else ErrorSeverity.CRITICAL,
            ctx,
            409 if is_conflict else 502,
        )
        self.operation = operation
        self.backend_code = backend_code


class AuthServiceError(AuroraError):
    """Hosted authentication service failed to create or resolve an account."""
    def __init__(
        self,
        message: str,
        status: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or message
        rejected = status is not None and 400 <= status < 500
        super().__init__(
            f"Auth service error: {message}",
            "AUTH_SERVICE_ERROR", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR if rejected else ErrorSeverity.CRITICAL,
            ctx,
            400 if rejected else 502,
        )
        self.status = status
