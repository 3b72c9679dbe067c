"""Error Hierarchy — typed, categorized exceptions for all catalog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
      and status_code (StatusCode)
    - Domain errors (400-level) are recoverable; storage errors (500-level) are critical
    - to_result() produces the failed ServiceResult the service boundary returns
    - Cancellation is its own category (TIMEOUT), never folded into INTERNAL

Design Decisions:
    - Single hierarchy with CatalogError base: the service boundary catches all of
      them and turns them into envelopes (uniform error shape)
    - ErrorContext as dataclass: its fields become log extras, and severity picks
      the log level, so callers never build log records by hand
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from product_catalog.core.domain_types import StatusCode


class ErrorSeverity(str, Enum):
    """Error severity; decides the level the error is logged at."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def log_level(self) -> int:
        return logging.getLevelName(self.name)


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where the error happened and what it was about."""
    operation: str | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    debug_info: dict[str, Any] | None = None


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        status_code: StatusCode = StatusCode.INTERNAL_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.status_code = status_code

    def log_fields(self) -> dict[str, Any]:
        """Logging extras for this error. None values are dropped by the formatter."""
        return {
            **(self.context.debug_info or {}),
            "error_code": self.code,
            "error_category": self.category.value,
            "status_code": int(self.status_code),
            "entity_type": self.context.entity_type,
            "entity_id": self.context.entity_id,
        }

    def to_result(self):
        """Convert to a failed ServiceResult envelope."""
        from product_catalog.core.results import ServiceResult
        return ServiceResult.from_error(self)


# ─── Domain Errors (400-level) ──────────────────────────────────

class RequestValidationError(CatalogError):
    """Request fields missing or invalid. Carries every reason, not just the first."""
    def __init__(self, reasons: list[str], context: ErrorContext | None = None):
        super().__init__(
            "\n".join(reasons), "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, StatusCode.BAD_REQUEST,
        )
        self.reasons = reasons


class ResourceNotFoundError(CatalogError):
    """Requested entity does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str | None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity_type = ctx.entity_type or resource_type.lower()
        ctx.entity_id = ctx.entity_id or resource_id
        super().__init__(
            f"{resource_type} with id '{resource_id}' could not be found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, StatusCode.NOT_FOUND,
        )


class DuplicateNameError(CatalogError):
    """Another entity in the collection already uses this name (case-insensitive)."""
    def __init__(
        self, resource_type: str, name: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity_type = ctx.entity_type or resource_type.lower()
        super().__init__(
            f"A {resource_type.lower()} named '{name}' already exists.",
            "DUPLICATE_NAME", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, StatusCode.CONFLICT,
        )
        self.name = name


class OperationCancelledError(CatalogError):
    """Caller signalled cancellation before the operation finished."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Operation '{operation}' was cancelled",
            "OPERATION_CANCELLED", ErrorCategory.TIMEOUT,
            ErrorSeverity.INFO, ctx, StatusCode.REQUEST_TIMEOUT,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(CatalogError):
    """File read, write or parse failed."""
    def __init__(
        self, message: str, operation: str, path: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        if path:
            ctx.debug_info = {**(ctx.debug_info or {}), "path": path}
        super().__init__(
            message, "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, StatusCode.INTERNAL_ERROR,
        )
