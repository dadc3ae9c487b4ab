"""
Login Request
Validates user login credentials
"""
import re
from typing import Any, Dict
from sanic import Request
from storefront.exceptions import ValidationError

_EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


class LoginRequest:
    """Validation for user login"""

    def __init__(self, request: Request):
        self.request = request

    def messages(self) -> Dict[str, str]:
        return {
            'email.required': 'Email is required',
            'email.email': 'Invalid email format',
            'password.required': 'Password is required',
        }

    def get_data(self) -> Dict[str, Any]:
        """
        Get and normalize data from request

        Email is lowercased and stripped.
        """
        # Malformed JSON raises sanic's BadRequest (400)
        data = self.request.json or {}
        if not isinstance(data, dict):
            data = {}

        if data.get('email'):
            data['email'] = str(data['email']).strip().lower()

        return data

    def validate(self) -> Dict[str, str]:
        """
        Returns:
            {'email': ..., 'password': ...}

        Raises:
            ValidationError: a field is missing or malformed
        """
        data = self.get_data()
        messages = self.messages()
        errors = {}

        email = data.get('email')
        password = data.get('password')

        if not email:
            errors['email'] = messages['email.required']
        elif not _EMAIL_PATTERN.match(email):
            errors['email'] = messages['email.email']

        if not password or not isinstance(password, str):
            errors['password'] = messages['password.required']

        if errors:
            raise ValidationError("Validation failed", errors=errors)

        return {'email': email, 'password': password}
