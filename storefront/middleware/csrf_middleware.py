"""
CSRF Protection Middleware
Protects against Cross-Site Request Forgery attacks

The token is HMAC(secret, session id), so it is only valid for a session
that has been verified in the durable store.
"""
from sanic import Request
from storefront.helpers import app_secret
from storefront.http import ResponseHelper
from storefront.logging import getLogger
from storefront.middleware.base_middleware import Middleware
from storefront.support import Config, Crypto


class CsrfMiddleware(Middleware):
    """CSRF token validation middleware"""

    @staticmethod
    def _get_config_defaults():
        from storefront.defaults import (
            DEFAULT_CSRF_HEADER_NAME,
            DEFAULT_CSRF_COOKIE_NAME,
            DEFAULT_CSRF_EXEMPT_PATHS,
            DEFAULT_CSRF_PROTECTED_METHODS,
        )
        return {
            'header_name': ('security.CSRF_HEADER_NAME', DEFAULT_CSRF_HEADER_NAME),
            'cookie_name': ('security.CSRF_COOKIE_NAME', DEFAULT_CSRF_COOKIE_NAME),
            'exempt_paths': ('security.CSRF_EXEMPT_PATHS', DEFAULT_CSRF_EXEMPT_PATHS),
            'protected_methods': ('security.CSRF_PROTECTED_METHODS', DEFAULT_CSRF_PROTECTED_METHODS),
        }

    ENABLED_CONFIG_KEY = 'security.CSRF_ENABLED'
    CONFIG_MAPPING = _get_config_defaults.__func__()
    DEFAULT_ENABLED = True

    def __init__(self, header_name='X-CSRF-Token', cookie_name='csrf-token',
                 exempt_paths=None, protected_methods=None, secret_key: str = None):
        self.header_name = header_name
        self.cookie_name = cookie_name
        self.exempt_paths = tuple(exempt_paths or [])
        self.protected_methods = {m.upper() for m in (protected_methods or ['POST', 'PUT', 'PATCH', 'DELETE'])}
        self.secret_key = secret_key or app_secret()

    def _requires_csrf_protection(self, request: Request) -> bool:
        """Only state-changing methods outside the exempt path prefixes are checked"""
        if request.method.upper() not in self.protected_methods:
            return False
        return not (self.exempt_paths and request.path.startswith(self.exempt_paths))

    async def before_request(self, request: Request):
        """Validate the token header on state-changing requests"""
        if not self._requires_csrf_protection(request):
            return None

        token = request.headers.get(self.header_name)
        session = getattr(request.ctx, 'session', None)

        if not token:
            self._log_rejection(request, 'missing')
            return ResponseHelper.forbidden('CSRF token missing', code='CSRF_TOKEN_MISSING')

        session_id = session.get_id() if session is not None else None
        if not Crypto.verify_csrf_token(token, session_id, self.secret_key):
            self._log_rejection(request, 'invalid')
            return ResponseHelper.forbidden('CSRF token invalid', code='CSRF_TOKEN_INVALID')

        return None

    async def after_response(self, request: Request, response):
        """
        Keep the CSRF cookie in step with the session

        httponly is off because the client must read the token to echo it
        in the header; samesite is Strict.
        """
        if response is None:
            return response

        session = getattr(request.ctx, 'session', None)

        if session is not None and session.is_authenticated():
            response.add_cookie(
                self.cookie_name,
                self.token_for(session.get_id()),
                path='/',
                httponly=False,
                secure=Config.get('session.COOKIE_SECURE', False),
                samesite='Strict',
                max_age=Config.get('session.LIFETIME')
            )
        elif request.cookies.get(self.cookie_name):
            response.delete_cookie(self.cookie_name, path='/')

        return response

    def token_for(self, session_id: str) -> str:
        return Crypto.generate_csrf_token(session_id, self.secret_key)

    def _log_rejection(self, request: Request, reason: str):
        getLogger('security').warning("CSRF check failed", extra={
            'reason': reason,
            'method': request.method,
            'path': request.path,
            'request_id': getattr(request.ctx, 'request_id', None),
        })
