"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    DUPLICATE_URL = "DUPLICATE_URL"

    # Not found errors (404)
    BOOKMARK_NOT_FOUND = "BOOKMARK_NOT_FOUND"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class BookmarkValidationError(AppException):
    """One or more bookmark fields failed validation."""

    def __init__(self, violations: list[Any]) -> None:
        self.violations = violations
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=", ".join(v.message for v in violations),
            status_code=400,
            details=[{"field": v.field, "message": v.message} for v in violations],
        )


class InvalidIdentifierError(AppException):
    """Identifier is not a well-formed bookmark ID."""

    def __init__(self, raw_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_INPUT,
            message="Invalid ID format",
            status_code=400,
            details={"id": raw_id},
        )


class BookmarkNotFoundError(AppException):
    """Bookmark not found."""

    def __init__(self, bookmark_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.BOOKMARK_NOT_FOUND,
            message="Bookmark not found",
            status_code=404,
            details={"bookmark_id": bookmark_id},
        )


class DuplicateUrlError(AppException):
    """A bookmark with the same normalized URL already exists.

    ``existing`` holds the conflicting bookmark so the caller can surface it.
    """

    def __init__(self, url: str, existing: Any | None = None) -> None:
        self.existing = existing
        super().__init__(
            error_code=ErrorCode.DUPLICATE_URL,
            message="A bookmark with this URL already exists",
            status_code=400,
            details={"url": url},
        )

