"""Error Hierarchy — typed, categorized exceptions for every request rejection path.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Guard rejections are 4xx; store failures never leave the process as details
    - to_response() produces the REST envelope {"error": message}, or None when
      the status is answered with an empty body (415)

Design Decisions:
    - Single hierarchy with VehicleApiError base: one global handler renders all guard errors
    - Guards raise, handlers render: a guard never builds a Response itself
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and logging."""
    MALFORMED_REQUEST = "malformed_request"
    VALIDATION = "validation"
    DATABASE = "database"


class VehicleApiError(Exception):
    """Base exception for all Vehicle API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        expose_message: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.expose_message = expose_message

    def to_response(self) -> dict | None:
        """Convert to the REST error envelope (None = empty body)."""
        if not self.expose_message:
            return None
        return {"error": self.message}


# ─── Malformed Requests (400 / 415) ─────────────────────────────

class RequestBodyNotAllowedError(VehicleApiError):
    """A body was sent to a route that takes none (GET, DELETE)."""
    def __init__(self, method: str):
        super().__init__(
            f"request body is not required for {method} method",
            "BODY_NOT_ALLOWED", ErrorCategory.MALFORMED_REQUEST,
            ErrorSeverity.WARNING, 400,
        )
        self.method = method


class EmptyRequestBodyError(VehicleApiError):
    """A write route received no body or an object with no keys."""
    def __init__(self):
        super().__init__(
            "request body is empty",
            "BODY_EMPTY", ErrorCategory.MALFORMED_REQUEST,
            ErrorSeverity.WARNING, 400,
        )


class UnsupportedMediaTypeError(VehicleApiError):
    """A write route received a content type other than application/json."""
    def __init__(self, content_type: str | None):
        super().__init__(
            f"unsupported media type: {content_type or 'none'}",
            "UNSUPPORTED_MEDIA_TYPE", ErrorCategory.MALFORMED_REQUEST,
            ErrorSeverity.WARNING, 415, expose_message=False,
        )
        self.content_type = content_type


class MalformedBodyError(VehicleApiError):
    """The body claimed to be JSON but could not be decoded.

    Deliberately rendered by the catch-all handler as a generic 400.
    """
    def __init__(self, reason: str):
        super().__init__(
            f"malformed JSON body: {reason}",
            "MALFORMED_BODY", ErrorCategory.MALFORMED_REQUEST,
            ErrorSeverity.WARNING, 400,
        )


# ─── Validation (422) ───────────────────────────────────────────

class SchemaViolationError(VehicleApiError):
    """Request body failed the vehicle ruleset."""
    def __init__(self, message: str, field: str | None, constraint: str):
        super().__init__(
            message, "SCHEMA_VIOLATION", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 422,
        )
        self.field = field
        self.constraint = constraint


# ─── Infrastructure (500-level) ─────────────────────────────────

class DatabaseError(VehicleApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500, expose_message=False,
        )
        self.operation = operation
