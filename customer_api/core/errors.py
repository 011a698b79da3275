"""Error Hierarchy — typed, categorized exceptions for all Customer API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), http_status (int)
    - to_response() produces the uniform REST envelope {success: false, message, ...}
    - Validation errors are raised before any store access

Design Decisions:
    - Single hierarchy with CustomerApiError base: one global handler renders all of them
    - `detail` holds internal information (driver messages); error handlers decide
      whether it is echoed, based on the environment mode
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Context carried alongside an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    customer_id: int | None = None
    address_id: int | None = None


class CustomerApiError(Exception):
    """Base exception for all Customer API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
        detail: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status
        self.detail = detail
        self.context = context or ErrorContext()

    def to_response(self, include_detail: bool = False) -> dict:
        """Convert to the standard REST error envelope."""
        body: dict[str, Any] = {"success": False, "message": self.message}
        if include_detail and self.detail:
            body["error"] = self.detail
        return body


# ─── Validation Errors (400) ────────────────────────────────────

class ValidationFailedError(CustomerApiError):
    """A named field-level validation failure."""
    def __init__(self, message: str, code: str, field: str | None = None):
        super().__init__(message, code, ErrorCategory.VALIDATION, 400)
        self.field = field


class MissingFieldsError(ValidationFailedError):
    """One or more required fields are absent."""
    def __init__(self, message: str, missing_fields: dict[str, bool]):
        super().__init__(message, "MISSING_FIELDS")
        self.missing_fields = missing_fields

    def to_response(self, include_detail: bool = False) -> dict:
        body = super().to_response(include_detail)
        body["missing_fields"] = self.missing_fields
        return body


class InvalidLengthError(ValidationFailedError):
    """A text field falls outside its allowed length."""
    def __init__(self, message: str, field: str):
        super().__init__(message, "INVALID_LENGTH", field)


class InvalidFormatError(ValidationFailedError):
    """A field does not match its required format."""
    def __init__(self, message: str, field: str):
        super().__init__(message, "INVALID_FORMAT", field)


class NoFieldsProvidedError(ValidationFailedError):
    """An update carried none of the updatable fields."""
    def __init__(self, message: str):
        super().__init__(message, "NO_FIELDS_PROVIDED")


# ─── Resource Errors (404 / 409) ────────────────────────────────

class ResourceNotFoundError(CustomerApiError):
    """Requested row does not exist."""
    def __init__(self, resource_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            404, context=context,
        )


class DuplicatePhoneError(CustomerApiError):
    """Phone number already used by another customer."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Phone number already exists",
            "DUPLICATE_PHONE", ErrorCategory.CONFLICT, 409, context=context,
        )


class DuplicateEmailError(CustomerApiError):
    """Email already used by another customer."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Email already exists",
            "DUPLICATE_EMAIL", ErrorCategory.CONFLICT, 409, context=context,
        )


# ─── Store Errors ───────────────────────────────────────────────

class StoreError(CustomerApiError):
    """Store operation failed (malformed query or constraint violation)."""
    def __init__(self, detail: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Database error occurred",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            400, detail=detail, context=context,
        )
        self.operation = operation


class CustomerWriteError(CustomerApiError):
    """Customer insert/update failed for a reason other than a uniqueness conflict."""
    def __init__(self, detail: str, context: ErrorContext | None = None):
        super().__init__(
            "Database error",
            "CUSTOMER_WRITE_FAILED", ErrorCategory.DATABASE,
            500, detail=detail, context=context,
        )
