"""
Centralized Error Handler
"""
from storefront.logging import getLogger
from storefront.http import ResponseHelper
from storefront.exceptions.custom import AppError
from typing import Dict, Any
from sanic import Request
from sanic.exceptions import SanicException


class ErrorHandler:
    """
    Provides standardized JSON error responses and error reporting
    """
    def __init__(self, debug: bool = False):
        """
        Initialize error handler
        Args:
            debug: Enable debug mode (expose internal error messages and request info)
        """
        self.debug = debug
        self.logger = getLogger('application')

    async def handle_error(self, request: Request, error: Exception):
        """
        Handle error and return consistent JSON response
        """
        status_code = self._get_status_code(error)
        payload = self._build_error_payload(error, request, status_code)

        self._log_error(error, request, status_code)

        return ResponseHelper.error(
            message=payload['message'],
            errors=payload.get('errors'),
            status=status_code,
            code=payload.get('code'),
        )

    def _build_error_payload(self, error: Exception, request: Request, status_code: int) -> Dict[str, Any]:
        payload = {
            'message': self._get_error_message(error, status_code),
            'code': getattr(error, 'error_code', None),
        }

        if getattr(error, 'errors', None):
            payload['errors'] = error.errors

        if self.debug and not isinstance(error, AppError):
            payload['errors'] = {
                'type': error.__class__.__name__,
                'path': request.path,
                'method': request.method,
            }

        return payload

    def _get_error_message(self, error: Exception, status_code: int) -> str:
        """
        Get user-friendly error message
        """
        if isinstance(error, AppError):
            # 5xx messages may carry store internals
            if status_code >= 500 and not self.debug:
                return error.__class__.message
            return error.message

        if isinstance(error, SanicException):
            return str(error)

        if not self.debug:
            return "An error occurred while processing your request"

        return str(error)

    def _get_status_code(self, error: Exception) -> int:
        """
        Determine HTTP status code from error
        """
        if isinstance(error, (AppError, SanicException)):
            return error.status_code

        return 500

    def _log_error(self, error: Exception, request: Request, status_code: int):
        """
        Log error with context
        """
        log_data = {
            'error_type': error.__class__.__name__,
            'error_message': str(error),
            'status_code': status_code,
            'method': request.method,
            'path': request.path,
            'request_id': getattr(request.ctx, 'request_id', None),
        }

        if status_code >= 500:
            self.logger.error(
                f"{status_code} Error: {error.__class__.__name__}",
                extra=log_data,
                exc_info=error
            )
        elif status_code >= 400:
            self.logger.warning(
                f"{status_code} Error: {error.__class__.__name__}",
                extra=log_data
            )
        else:
            self.logger.info(f"{status_code} Response", extra=log_data)
