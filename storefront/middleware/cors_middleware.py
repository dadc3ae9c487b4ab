"""
CORS Middleware
Handles Cross-Origin Resource Sharing headers for the browser client

Development reflects any origin; production only allows the configured
frontend origins (FRONTEND_URL, REPLIT_DEV_DOMAIN, CORS_ALLOWED_ORIGINS).
Credentials are always allowed because the session travels in a cookie.
"""
import re
from typing import List, Optional, Pattern, Union
from sanic import Request
from storefront.http import ResponseHelper
from storefront.logging import getLogger
from storefront.middleware.base_middleware import Middleware


class CorsConfigurationError(Exception):
    """Exception raised for insecure CORS configuration"""
    pass


class CorsMiddleware(Middleware):
    """CORS middleware with origin patterns and preflight handling"""

    @staticmethod
    def _get_config_defaults():
        from storefront.defaults import (
            DEFAULT_CORS_MAX_AGE,
            DEFAULT_CORS_METHODS,
            DEFAULT_CORS_HEADERS,
            DEFAULT_CORS_PREFLIGHT_STATUS,
        )
        return {
            'allowed_origins': ('security.ALLOWED_ORIGINS', []),
            'allowed_methods': ('security.CORS_METHODS', DEFAULT_CORS_METHODS),
            'allowed_headers': ('security.CORS_HEADERS', DEFAULT_CORS_HEADERS),
            'max_age': ('security.CORS_MAX_AGE', DEFAULT_CORS_MAX_AGE),
            'preflight_status': ('security.CORS_PREFLIGHT_STATUS', DEFAULT_CORS_PREFLIGHT_STATUS),
        }

    ENABLED_CONFIG_KEY = 'security.CORS_ENABLED'
    CONFIG_MAPPING = _get_config_defaults.__func__()
    STATIC_PARAMS = {'allow_credentials': True, 'expose_headers': ['x-request-id']}
    DEFAULT_ENABLED = True

    @classmethod
    def _load_config_params(cls):
        from storefront.support import Config
        params = super()._load_config_params()
        params['reflect_origin'] = Config.get('app.APP_ENV', 'development') != 'production'
        return params

    def __init__(
        self,
        allowed_origins: Union[str, List[str], Pattern] = None,
        allowed_methods: List[str] = None,
        allowed_headers: List[str] = None,
        expose_headers: List[str] = None,
        allow_credentials: bool = True,
        max_age: int = 86400,
        preflight_status: int = 200,
        reflect_origin: bool = False
    ):
        """
        Initialize CORS middleware

        Args:
            allowed_origins: Exact origins or wildcard patterns ('https://*.example.com')
            reflect_origin: Echo back any request origin (development)
            preflight_status: Status code for successful OPTIONS preflights
        """
        self.origin_patterns = self._parse_origins(allowed_origins or [])
        self.wildcard_origin = any(p.pattern == '.*' for p in self.origin_patterns)
        self.reflect_origin = reflect_origin

        self.allowed_methods = [m.upper() for m in (allowed_methods or
            ['GET', 'POST', 'PUT', 'DELETE', 'PATCH', 'OPTIONS'])]
        self.allowed_headers = [h.lower().strip() for h in (allowed_headers or
            ['content-type', 'authorization'])]
        self.expose_headers = [h.lower() for h in (expose_headers or [])]
        self.allow_credentials = allow_credentials
        self.max_age = max_age
        self.preflight_status = preflight_status

        if self.wildcard_origin and self.allow_credentials and not self.reflect_origin:
            raise CorsConfigurationError(
                "Cannot use wildcard origin (*) with credentials. "
                "Either specify explicit origins or set allow_credentials=False."
            )

    def _parse_origins(self, origins: Union[str, List[str], Pattern]) -> List[Pattern]:
        """
        Parse origins into regex patterns (supports wildcards)

        Examples:
            '*' -> matches any origin
            'https://example.com' -> exact match
            'https://*.example.com' -> matches any subdomain with https
        """
        if isinstance(origins, Pattern):
            return [origins]

        if isinstance(origins, str):
            origins = [origins]

        patterns = []
        for origin in origins:
            origin = origin.strip().rstrip('/')
            if not origin:
                continue
            if origin == '*':
                patterns.append(re.compile(r'.*'))
            elif '*' in origin:
                # https://*.example.com -> ^https://.*\.example\.com$
                pattern = re.escape(origin).replace(r'\*', '.*')
                patterns.append(re.compile(f'^{pattern}$'))
            else:
                patterns.append(re.compile(f'^{re.escape(origin)}$'))

        return patterns

    def is_origin_allowed(self, origin: Optional[str]) -> bool:
        """
        Check an Origin header against the policy

        Requests without an Origin header (same-origin, curl, server to
        server) are always allowed.
        """
        if not origin:
            return True

        if self.reflect_origin:
            return True

        return any(pattern.match(origin) for pattern in self.origin_patterns)

    def _is_preflight(self, request: Request) -> bool:
        return (
            request.method == 'OPTIONS'
            and 'access-control-request-method' in request.headers
        )

    def _rejected(self, request: Request, origin: str):
        getLogger('security').warning("CORS origin rejected", extra={
            'origin': origin,
            'method': request.method,
            'path': request.path,
        })
        return ResponseHelper.error(
            'Not allowed by CORS', status=403, code='CORS_ORIGIN_NOT_ALLOWED'
        )

    async def before_request(self, request: Request):
        """Reject disallowed origins and answer preflight requests"""
        origin = request.headers.get('origin')

        if not self.is_origin_allowed(origin):
            return self._rejected(request, origin)

        if self._is_preflight(request):
            return self._build_preflight_response(request)

        return None

    async def after_response(self, request: Request, response):
        """Add CORS headers to response"""
        origin = request.headers.get('origin')

        if response is None or not origin or not self.is_origin_allowed(origin):
            return response

        response.headers['Access-Control-Allow-Origin'] = origin

        if self.allow_credentials:
            response.headers['Access-Control-Allow-Credentials'] = 'true'

        if self.expose_headers:
            response.headers['Access-Control-Expose-Headers'] = ', '.join(self.expose_headers)

        # The allowed origin is echoed back, so caches must key on it
        response.headers['Vary'] = 'Origin'

        return response

    def _build_preflight_response(self, request: Request):
        """Build response for OPTIONS preflight request"""
        headers = {
            'Access-Control-Allow-Methods': ', '.join(self.allowed_methods),
            'Access-Control-Allow-Headers': ', '.join(self.allowed_headers),
            'Access-Control-Max-Age': str(self.max_age),
        }

        # Origin, credentials and Vary are added by after_response
        return ResponseHelper.empty(status=self.preflight_status, headers=headers)
