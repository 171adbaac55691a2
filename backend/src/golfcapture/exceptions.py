"""
Domain Exceptions
Typed outcomes raised by the service layer and mapped to HTTP responses in main.py
"""

from typing import Any, Dict, Optional


class GolfCaptureError(Exception):
    """Base class for all domain errors"""

    status_code = 400

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"detail": self.message}
        payload.update({k: v for k, v in self.context.items() if v is not None})
        return payload


class ValidationError(GolfCaptureError):
    """Rejected input; nothing was written"""

    status_code = 422

    def __init__(self, message: str, field: Optional[str] = None, errors: Optional[Dict[str, str]] = None):
        super().__init__(message, field=field, errors=errors)
        self.field = field
        self.errors = errors or ({field: message} if field else {})


class NotFoundError(GolfCaptureError):
    """Unknown course, location, reward code, segment, pipeline entry, etc."""

    status_code = 404

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found" if identifier is None else f"{resource} '{identifier}' not found"
        super().__init__(message, resource=resource)
        self.resource = resource
        self.identifier = identifier


class ConflictError(GolfCaptureError):
    """Duplicate redemption, duplicate name, last-admin guard, code exhaustion"""

    status_code = 409

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message, reason=reason)
        self.reason = reason
