"""Error Hierarchy — typed, categorized exceptions for all Pokedex failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (400-level) are recoverable; dataset errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - AbilityLookupError never reaches a client: the ability cache turns it into "not found"

Design Decisions:
    - Single hierarchy with PokedexError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from pokedex.core.domain_types import LookupFailure


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
    DATASET = "dataset"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_id: str | None = None
    source: str | None = None
    debug_info: dict[str, Any] | None = None


class PokedexError(Exception):
    """Base exception for all Pokedex errors."""

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
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Input Errors (400-level) ───────────────────────────────────

class InvalidInputError(PokedexError):
    """A required request parameter is blank."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class InvalidSearchError(PokedexError):
    """Search called without a name or a type."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Please provide a name or type parameter to search for Pokemon",
            "INVALID_SEARCH", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class ResourceNotFoundError(PokedexError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )


# ─── Dataset Errors (500-level, fatal at load) ──────────────────

class DatasetSourceNotFoundError(PokedexError):
    """Bulk dataset source does not exist."""
    def __init__(self, location: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.source = location
        super().__init__(
            f"Pokemon data file not found at {location}",
            "DATASET_NOT_FOUND", ErrorCategory.DATASET,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.location = location


class DatasetFormatError(PokedexError):
    """Bulk dataset source could not be parsed into records."""
    def __init__(self, location: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.source = location
        super().__init__(
            f"Failed to parse Pokemon data file: {reason}",
            "DATASET_MALFORMED", ErrorCategory.DATASET,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.location = location


# ─── Upstream Errors (internal only) ────────────────────────────

class AbilityLookupError(PokedexError):
    """Resolving an ability description upstream failed."""
    def __init__(
        self,
        url: str,
        failure: LookupFailure,
        detail: str = "",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = url
        message = f"Ability lookup failed ({failure.value})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(
            message, "ABILITY_LOOKUP_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, ctx, 502,
        )
        self.url = url
        self.failure = failure
