"""
Auth Middleware
Requires an authenticated session on protected URL prefixes
"""
from typing import List
from sanic import Request
from storefront.exceptions import AuthenticationError
from storefront.middleware.base_middleware import Middleware


class AuthMiddleware(Middleware):
    """
    Authentication middleware - requires user to be logged in

    Behavior:
    - If the session carries a user: expose user_id and user_roles on request.ctx
    - Otherwise on a protected prefix: raise AuthenticationError (401 JSON)

    Must run after SessionMiddleware.
    """

    CONFIG_MAPPING = {
        'protected_prefixes': ('security.AUTH_PROTECTED_PREFIXES', ['/api/auth/me']),
    }
    DEFAULT_ENABLED = True

    def __init__(self, protected_prefixes: List[str] = None):
        self.protected_prefixes = tuple(protected_prefixes or [])

    def _is_protected(self, request: Request) -> bool:
        return request.path.startswith(self.protected_prefixes) if self.protected_prefixes else False

    async def before_request(self, request: Request):
        """
        Attach the session user to the request context

        Returns:
            None: continue to the next middleware/handler

        Raises:
            AuthenticationError: protected path without an authenticated session
        """
        session = getattr(request.ctx, 'session', None)

        if session is not None and session.is_authenticated():
            request.ctx.user_id = session.user_id()
            request.ctx.user_roles = session.roles()
            return None

        request.ctx.user_id = None
        request.ctx.user_roles = []

        if request.method != 'OPTIONS' and self._is_protected(request):
            raise AuthenticationError("Authentication required")

        return None
