"""
Middleware Package
Exports all middleware classes for easy import
"""
from storefront.middleware.base_middleware import Middleware
from storefront.middleware.request_logger_middleware import RequestLoggerMiddleware
from storefront.middleware.cors_middleware import CorsMiddleware, CorsConfigurationError
from storefront.middleware.session_middleware import SessionMiddleware
from storefront.middleware.csrf_middleware import CsrfMiddleware
from storefront.middleware.auth_middleware import AuthMiddleware

__all__ = [
    'Middleware',
    'RequestLoggerMiddleware',
    'CorsMiddleware',
    'CorsConfigurationError',
    'SessionMiddleware',
    'CsrfMiddleware',
    'AuthMiddleware',
]
