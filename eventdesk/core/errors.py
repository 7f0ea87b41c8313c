"""
Application error taxonomy.

Every error carries the HTTP status it maps to and a message that is safe to
show to clients. Internal detail goes to the log, never into ``message``.
"""

from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for errors that surface as JSON API responses"""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "message": self.message}
        body.update(self.extra)
        return body


class ValidationError(AppError):
    """A required field is missing or unusable"""

    status_code = 400
    default_message = "Invalid request"


class AlreadyPaidError(AppError):
    """Registration for this email has already been paid for"""

    status_code = 400
    default_message = "This email is already registered and paid"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, alreadyPaid=True)


class AuthError(AppError):
    status_code = 401
    default_message = "Invalid credentials"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class DataStoreError(AppError):
    """Any statement failure against the relational store"""

    status_code = 500
    default_message = "Database error"


class GatewayError(AppError):
    """Payment gateway unreachable, misconfigured or rejecting the request"""

    status_code = 500
    default_message = "Payment gateway error"


class NotificationError(AppError):
    """Email or WhatsApp delivery failure"""

    status_code = 500
    default_message = "Failed to send message"
