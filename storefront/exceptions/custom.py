"""
Custom Exception Classes
Application exceptions with HTTP status codes and machine-readable error codes
"""
from typing import Optional, Dict, Any


class AppError(Exception):
    """Base exception for all application errors"""
    status_code = 500
    message = "An error occurred"
    error_code: Optional[str] = None

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        code: Optional[str] = None
    ):
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        self.error_code = code or self.__class__.error_code
        super().__init__(self.message)


class ValidationError(AppError):
    """
    Validation error exception

    Raised when request input is rejected

    Example:
        raise ValidationError("Email is required", errors={'email': 'required'})
    """
    status_code = 400
    message = "Validation failed"
    error_code = 'VALIDATION_ERROR'

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[Dict[str, Any]] = None,
        code: Optional[str] = None
    ):
        super().__init__(message, code=code)
        self.errors = errors or {}


class AuthenticationError(AppError):
    """
    Raised when authentication is required but not provided or not usable

    Example:
        raise AuthenticationError("Invalid credentials")
    """
    status_code = 401
    message = "Authentication required"
    error_code = 'AUTHENTICATION_ERROR'


class AuthorizationError(AppError):
    """Raised when the user lacks the role needed for an action"""
    status_code = 403
    message = "Insufficient permissions"
    error_code = 'AUTHORIZATION_ERROR'


class NotFoundError(AppError):
    """
    Resource not found exception

    Example:
        raise NotFoundError("User")  # "User not found"
    """
    status_code = 404
    error_code = 'NOT_FOUND'

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")
        self.resource = resource


class ConflictError(AppError):
    """Raised when request conflicts with current state"""
    status_code = 409
    message = "Resource conflict"
    error_code = 'CONFLICT'


class PayloadTooLargeError(AppError):
    """Raised when an uploaded file exceeds its size limit"""
    status_code = 413
    message = "File too large"
    error_code = 'LIMIT_FILE_SIZE'


# ============================================================================
# Session errors
# ============================================================================

class SessionError(AppError):
    """Base class for session lifecycle failures"""
    status_code = 503
    message = "Session unavailable"
    error_code = 'SESSION_ERROR'


class SessionStoreError(SessionError):
    """
    Transport or backend failure while regenerating or persisting a session

    Fatal to the current initialization attempt; never retried by the
    readiness protocol.
    """
    message = "Session store operation failed"
    error_code = 'SESSION_STORE_ERROR'

    def __init__(self, message: Optional[str] = None, session_id: Optional[str] = None):
        super().__init__(message)
        self.session_id = session_id


class SessionNotReadyError(SessionError):
    """Verification exhausted every attempt without observing the session record"""
    error_code = 'SESSION_NOT_READY'

    def __init__(self, session_id: str, attempts: int):
        super().__init__(
            f"Session {session_id} not found in store after {attempts} attempts"
        )
        self.session_id = session_id
        self.attempts = attempts


class VerificationCancelled(SessionError):
    """Verification was cancelled before the session record was observed"""
    error_code = 'SESSION_VERIFICATION_CANCELLED'

    def __init__(self, session_id: Optional[str] = None, reason: Optional[str] = None):
        super().__init__(f"Session verification cancelled: {reason or 'cancelled'}")
        self.session_id = session_id
        self.reason = reason
