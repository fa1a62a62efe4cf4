"""
Domain error kinds shared by the services, the HTTP layer and the admin client
"""

from typing import Optional


class WheelAppError(Exception):
    """Base class for errors with a defined API outcome"""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(WheelAppError):
    """A required field is missing or empty"""

    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class NotFound(WheelAppError):
    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource", message: Optional[str] = None):
        super().__init__(message or f"{resource} not found")
        self.resource = resource


class Conflict(WheelAppError):
    status_code = 409
    error_code = "CONFLICT"


class AdminAuthRequired(WheelAppError):
    """Credentials missing, invalid or expired; the caller must sign in again.

    Subclasses only exist so logs can say why. Every one of them has the same
    external outcome.
    """

    status_code = 401
    error_code = "ADMIN_AUTH_REQUIRED"
    reason = "invalid"

    def __init__(self, message: str = "Admin authentication required"):
        super().__init__(message)


class InvalidCredentials(AdminAuthRequired):
    reason = "invalid"


class SessionExpired(AdminAuthRequired):
    reason = "expired"


class MissingCredentials(AdminAuthRequired):
    reason = "missing"


class ApiError(WheelAppError):
    """Unexpected failure reported by (or while reaching) the server"""
