"""
Exceptions Package
Typed application errors and centralized error handling
"""
from storefront.exceptions.custom import (
    AppError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
    PayloadTooLargeError,
    SessionError,
    SessionStoreError,
    SessionNotReadyError,
    VerificationCancelled,
)
from storefront.exceptions.error_handler import ErrorHandler

__all__ = [
    'ErrorHandler',
    'AppError',
    'ValidationError',
    'AuthenticationError',
    'AuthorizationError',
    'NotFoundError',
    'ConflictError',
    'PayloadTooLargeError',
    'SessionError',
    'SessionStoreError',
    'SessionNotReadyError',
    'VerificationCancelled',
]
