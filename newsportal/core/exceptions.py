from enum import Enum
from typing import Optional, Dict, Any, List


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION_ERROR"
    AUTHENTICATION = "AUTHENTICATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UPLOAD_POLICY = "UPLOAD_POLICY_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    CONTENT_PROCESSING = "CONTENT_PROCESSING_ERROR"
    INTERNAL = "INTERNAL_ERROR"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UPLOAD_POLICY: 400,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.CONTENT_PROCESSING: 500,
    ErrorKind.INTERNAL: 500,
}


class UploadViolation(str, Enum):
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    UNSUPPORTED_FILE_TYPE = "UNSUPPORTED_FILE_TYPE"
    TOO_MANY_FILES = "TOO_MANY_FILES"
    UNEXPECTED_FIELD = "UNEXPECTED_FIELD"


class PortalError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code or self.kind.value
        self.details = details or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "success": False,
            "message": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(PortalError):
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["errors"] = self.errors
        return payload


class AuthenticationError(PortalError):
    kind = ErrorKind.AUTHENTICATION


class ForbiddenError(PortalError):
    kind = ErrorKind.FORBIDDEN


class NotFoundError(PortalError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(PortalError):
    kind = ErrorKind.CONFLICT


class UploadPolicyError(PortalError):
    kind = ErrorKind.UPLOAD_POLICY

    def __init__(self, message: str, violation: UploadViolation, field: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=violation.value,
            details={"field": field} if field else None,
        )
        self.violation = violation
        self.field = field


class RateLimitExceededError(PortalError):
    kind = ErrorKind.RATE_LIMITED

    def __init__(self, group: str, retry_after: int):
        super().__init__(
            message="Too many requests, please try again later",
            details={"group": group, "retry_after": retry_after},
        )
        self.retry_after = retry_after


class ContentProcessingError(PortalError):
    kind = ErrorKind.CONTENT_PROCESSING
