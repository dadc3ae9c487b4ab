"""
Session Middleware
Starts and saves sessions automatically
"""
import asyncio
import random
from typing import Optional
from sanic import Request
from storefront.exceptions import SessionStoreError
from storefront.helpers import app_secret
from storefront.logging import getLogger
from storefront.middleware.base_middleware import Middleware
from storefront.session.session_manager import SessionManager
from storefront.session.store import SessionStore
from storefront.session.stores import ArraySessionStore, DatabaseSessionStore, FileSessionStore
from storefront.support import Crypto, Storage

logger = getLogger(__name__)


class SessionMiddleware(Middleware):
    """Session management middleware"""

    @staticmethod
    def _get_config_defaults():
        from storefront.defaults import (
            DEFAULT_SESSION_DRIVER,
            DEFAULT_SESSION_LIFETIME,
            DEFAULT_SESSION_COOKIE_NAME,
            DEFAULT_SESSION_LOTTERY,
        )
        return {
            'driver': ('session.DRIVER', DEFAULT_SESSION_DRIVER),
            'lifetime': ('session.LIFETIME', DEFAULT_SESSION_LIFETIME),
            'cookie_name': ('session.COOKIE_NAME', DEFAULT_SESSION_COOKIE_NAME),
            'cookie_path': ('session.COOKIE_PATH', '/'),
            'cookie_domain': ('session.COOKIE_DOMAIN', None),
            'cookie_secure': ('session.COOKIE_SECURE', False),
            'cookie_http_only': ('session.COOKIE_HTTP_ONLY', True),
            'cookie_same_site': ('session.COOKIE_SAME_SITE', 'Lax'),
            'lottery': ('session.SESSION_LOTTERY', DEFAULT_SESSION_LOTTERY),
        }

    CONFIG_MAPPING = _get_config_defaults.__func__()
    DEFAULT_ENABLED = True

    def __init__(self, driver='database', lifetime=None, cookie_name=None,
                 cookie_path='/', cookie_domain=None, cookie_secure=False,
                 cookie_http_only=True, cookie_same_site='Lax', lottery=None,
                 store: Optional[SessionStore] = None, secret_key: Optional[str] = None):
        """
        Initialize session middleware

        Args:
            store: Ready-made store; when omitted one is built from `driver`
            secret_key: Cookie signing secret (default: app secret)
        """
        from storefront.defaults import DEFAULT_SESSION_LIFETIME, DEFAULT_SESSION_COOKIE_NAME, DEFAULT_SESSION_LOTTERY
        self.config = {
            'driver': driver,
            'lifetime': lifetime or DEFAULT_SESSION_LIFETIME,
            'cookie_name': cookie_name or DEFAULT_SESSION_COOKIE_NAME,
            'cookie_path': cookie_path,
            'cookie_domain': cookie_domain,
            'cookie_secure': cookie_secure,
            'cookie_http_only': cookie_http_only,
            'cookie_same_site': cookie_same_site,
            'lottery': lottery or DEFAULT_SESSION_LOTTERY,
        }
        self.secret_key = secret_key or app_secret()
        self.store = store or self._create_store()
        self._gc_tasks = set()

    def _create_store(self) -> SessionStore:
        """Create session store based on driver"""
        driver = self.config['driver']

        if driver == 'database':
            return DatabaseSessionStore()

        elif driver == 'file':
            return FileSessionStore(Storage.sessions())

        elif driver == 'array':
            return ArraySessionStore()

        raise ValueError(f"Unknown session driver: {driver}")

    def _get_session_id(self, request: Request) -> str:
        """Get session ID from the signed cookie or generate new one"""
        from storefront.defaults import DEFAULT_SESSION_ID_LENGTH

        cookie_value = request.cookies.get(self.config['cookie_name'])
        session_id = None

        if cookie_value:
            session_id = Crypto.verify_signed_data(cookie_value, self.secret_key)
            if session_id is None:
                logger.warning("Rejected session cookie with invalid signature")

        return session_id or Crypto.generate_token(DEFAULT_SESSION_ID_LENGTH)

    async def before_request(self, request: Request):
        """Start session before request"""
        session = SessionManager(
            store=self.store,
            session_id=self._get_session_id(request),
            lifetime=self.config['lifetime']
        )

        await session.start()

        request.ctx.session = session

        return None

    async def after_response(self, request: Request, response):
        """Save session after response"""
        session: Optional[SessionManager] = getattr(request.ctx, 'session', None)
        if session is None or response is None:
            return response

        try:
            await session.save()
        except SessionStoreError as e:
            logger.error("Session could not be saved after response", extra={
                'path': request.path,
                'error': str(e),
            })
            return response

        self._set_session_cookie(request, response, session)

        self._maybe_run_gc()

        return response

    def _set_session_cookie(self, request: Request, response, session: SessionManager):
        """Set (or clear) the session cookie on the response"""
        cookie_name = self.config['cookie_name']

        if not session.all():
            # Nothing worth keeping, drop a stale cookie
            if request.cookies.get(cookie_name):
                response.delete_cookie(
                    cookie_name,
                    path=self.config['cookie_path'],
                    domain=self.config['cookie_domain'],
                )
            return

        response.add_cookie(
            cookie_name,
            Crypto.sign_data(session.get_id(), self.secret_key),
            path=self.config['cookie_path'],
            domain=self.config['cookie_domain'],
            secure=self.config['cookie_secure'],
            httponly=self.config['cookie_http_only'],
            samesite=self.config['cookie_same_site'],
            max_age=self.config['lifetime']
        )

    def _maybe_run_gc(self):
        """Maybe run garbage collection based on lottery"""
        lottery = self.config['lottery']
        if random.randint(1, lottery[1]) <= lottery[0]:
            # Run GC in background (non-blocking)
            task = asyncio.create_task(self._run_gc())
            self._gc_tasks.add(task)
            task.add_done_callback(self._gc_tasks.discard)

    async def _run_gc(self):
        try:
            deleted = await self.store.gc(self.config['lifetime'])
        except Exception as e:
            logger.error("Session garbage collection failed", extra={'error': str(e)})
            return
        if deleted:
            logger.info("Expired sessions removed", extra={'deleted': deleted})
