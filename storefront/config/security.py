"""
Security configuration (CSRF, CORS, password hashing)
"""
from storefront.support.env_helper import EnvHelper
from storefront import defaults

CSRF_ENABLED = EnvHelper.get_bool('CSRF_ENABLED', True)
CSRF_HEADER_NAME = defaults.DEFAULT_CSRF_HEADER_NAME
CSRF_COOKIE_NAME = defaults.DEFAULT_CSRF_COOKIE_NAME
CSRF_EXEMPT_PATHS = EnvHelper.get_list('CSRF_EXEMPT_PATHS', defaults.DEFAULT_CSRF_EXEMPT_PATHS)

CORS_ENABLED = EnvHelper.get_bool('CORS_ENABLED', True)
# Production allow list; empty entries are dropped
ALLOWED_ORIGINS = [
    origin for origin in (EnvHelper.get('FRONTEND_URL'), EnvHelper.get('REPLIT_DEV_DOMAIN'))
    if origin
] + EnvHelper.get_list('CORS_ALLOWED_ORIGINS')
CORS_METHODS = defaults.DEFAULT_CORS_METHODS
CORS_HEADERS = defaults.DEFAULT_CORS_HEADERS
CORS_MAX_AGE = defaults.DEFAULT_CORS_MAX_AGE

BCRYPT_ROUNDS = EnvHelper.get_int('BCRYPT_ROUNDS', defaults.DEFAULT_BCRYPT_ROUNDS)

# URL prefixes that require an authenticated session
AUTH_PROTECTED_PREFIXES = ['/api/auth/me']
