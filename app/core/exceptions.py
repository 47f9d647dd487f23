"""
Domain errors raised by the service layer.

Services raise these; the API layer renders them through a single exception
handler as ``{"detail": message, "code": code}`` with ``status_code``.
"""

from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for every error the API reports to the caller."""

    status_code = 400
    code = "APP_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body = {"detail": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


# ============================================
# Authorization
# ============================================

class PermissionDenied(AppError):
    status_code = 403
    code = "PERMISSION_DENIED"

    def __init__(self, message: str = "You are not allowed to perform this action"):
        super().__init__(message)


# ============================================
# Validation / lookup
# ============================================

class ValidationFailed(AppError, ValueError):
    status_code = 400
    code = "VALIDATION_FAILED"


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"


# ============================================
# Registration admission
# ============================================

class RegistrationRejected(AppError):
    status_code = 409
    code = "REGISTRATION_REJECTED"


class EventNotApproved(RegistrationRejected):
    code = "EVENT_NOT_APPROVED"

    def __init__(self, message: str = "Event is not approved"):
        super().__init__(message)


class AlreadyRegistered(RegistrationRejected):
    code = "ALREADY_REGISTERED"

    def __init__(self, message: str = "Already registered for this event"):
        super().__init__(message)


class EventFull(RegistrationRejected):
    code = "EVENT_FULL"

    def __init__(self, message: str = "Event is full. No more registrations."):
        super().__init__(message)
