"""
Domain errors raised by the service layer.

Services signal failures by raising one of these; the API layer maps each
class to a status code in ``tarbiya.main``.
"""
from typing import Any, Dict


class TarbiyaError(Exception):
    """Base class for all domain errors."""

    status_code = 400
    error_code = "TARBIYA_ERROR"

    def __init__(self, message: str, error_code: str | None = None, context: Dict[str, Any] | None = None):
        self.message = message
        if error_code:
            self.error_code = error_code
        self.context = context or {}
        super().__init__(message)


class InvalidInput(TarbiyaError):
    """Malformed or missing input, detected before any write."""

    status_code = 400
    error_code = "INVALID_INPUT"


class NotFound(TarbiyaError):
    """A referenced account, child, note or pending change does not exist (or is not visible)."""

    status_code = 404
    error_code = "NOT_FOUND"


class InvalidOperation(TarbiyaError):
    """The request is well formed but breaks a business rule."""

    status_code = 409
    error_code = "INVALID_OPERATION"


class QuotaExceeded(InvalidOperation):
    status_code = 403
    error_code = "QUOTA_EXCEEDED"

    def __init__(self, message: str, current_count: int | None = None, max_allowed: int | None = None):
        super().__init__(message, context={"current_count": current_count, "max_allowed": max_allowed})
        self.current_count = current_count
        self.max_allowed = max_allowed


class NotPermitted(InvalidOperation):
    status_code = 403
    error_code = "NOT_PERMITTED"
