"""
Response Helpers
Standardized response utilities for consistent API responses
"""
from sanic.response import json as sanic_json, empty as sanic_empty, HTTPResponse
from typing import Any, Dict, Optional, Union


class ResponseHelper:
    """
    Response helper for consistent JSON responses

    Every JSON body carries a `success` flag; errors add `message`, `code`
    and optional `errors`.

    Example:
        return ResponseHelper.success({'user': user_data}, 'Login successful')
        return ResponseHelper.error('Not allowed by CORS', status=403, code='CORS_ORIGIN_NOT_ALLOWED')
    """

    @staticmethod
    def success(
        data: Any = None,
        message: Optional[str] = None,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None
    ) -> HTTPResponse:
        """
        Return success response

        Example:
            return ResponseHelper.success({'user': user}, 'Login successful')
        """
        body = {'success': True, 'data': data}
        if message:
            body['message'] = message
        return sanic_json(body, status=status, headers=headers)

    @staticmethod
    def error(
        message: str,
        errors: Optional[Union[Dict[str, Any], list]] = None,
        status: int = 400,
        code: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> HTTPResponse:
        """
        Return error response

        Example:
            return ResponseHelper.error('Validation failed', {'email': 'required'}, 400, 'VALIDATION_ERROR')
        """
        body = {'success': False, 'message': message}
        if code:
            body['code'] = code
        if errors:
            body['errors'] = errors
        return sanic_json(body, status=status, headers=headers)

    @staticmethod
    def unauthorized(message: str = 'Authentication required') -> HTTPResponse:
        return ResponseHelper.error(message, status=401, code='AUTHENTICATION_ERROR')

    @staticmethod
    def forbidden(message: str = 'Forbidden', code: Optional[str] = None) -> HTTPResponse:
        return ResponseHelper.error(message, status=403, code=code)

    @staticmethod
    def empty(status: int = 204, headers: Optional[Dict[str, str]] = None) -> HTTPResponse:
        """Return a response without body (e.g. CORS preflight)"""
        return sanic_empty(status=status, headers=headers)
