"""
Auth Request Validators
"""
from storefront.auth.requests.login_request import LoginRequest

__all__ = ['LoginRequest']
