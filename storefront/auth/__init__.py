"""
Auth Package
Session-based authentication: credential checks and the auth endpoints
"""
from storefront.auth.auth_service import AuthService
from storefront.auth.auth_controller import AuthController

__all__ = [
    'AuthService',
    'AuthController',
]
