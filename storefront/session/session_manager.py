"""
Session Manager
Request-scoped session payload with pluggable storage drivers
"""
import time
from typing import Any, Dict, Iterable, List, Optional
from storefront.exceptions import SessionStoreError
from storefront.logging import getLogger
from storefront.session.store import SessionStore
from storefront.support import Crypto

logger = getLogger(__name__)

USER_ID_KEY = 'user_id'
USER_ROLES_KEY = 'user_roles'


class SessionManager:
    """
    Session bound to one request

    Provides dictionary-like interface with additional methods:
    - get(), put(), has(), all(), pull(), forget(), flush()
    - set_user(), user_id(), roles(), is_authenticated()
    - regenerate(), invalidate(), save()

    The identifier and the payload are separate values: the request owns
    the payload until save() hands it to the store.
    """

    def __init__(self, store: SessionStore, session_id: str, lifetime: int = None):
        """
        Initialize session manager

        Args:
            store: Session storage driver
            session_id: Session identifier
            lifetime: Session lifetime in seconds
        """
        if lifetime is None:
            from storefront.defaults import DEFAULT_SESSION_LIFETIME
            lifetime = DEFAULT_SESSION_LIFETIME
        self.store = store
        self.session_id = session_id
        self.lifetime = lifetime
        self._data: Dict[str, Any] = {}
        self._loaded = False
        self._dirty = False

    async def start(self):
        """Load session data from storage"""
        if self._loaded:
            return

        self._data = await self.store.read(self.session_id)
        self._loaded = True

    # === Data Retrieval ===

    def get(self, key: str, default: Any = None) -> Any:
        """Get session value"""
        return self._data.get(key, default)

    def all(self) -> Dict[str, Any]:
        """
        Get all session data

        Returns:
            Session data without internal ('_' prefixed) keys
        """
        return {k: v for k, v in self._data.items() if not k.startswith('_')}

    def has(self, key: str) -> bool:
        """Check if key exists in session"""
        return key in self._data

    # === Data Storage ===

    def put(self, key: str, value: Any) -> None:
        """Store value in session"""
        self._data[key] = value
        self._dirty = True

    def forget(self, keys: str | List[str]) -> None:
        """Remove key(s) from session"""
        if isinstance(keys, str):
            keys = [keys]

        for key in keys:
            self._data.pop(key, None)

        self._dirty = True

    def pull(self, key: str, default: Any = None) -> Any:
        """Get and remove value from session"""
        value = self.get(key, default)
        self.forget(key)
        return value

    def flush(self) -> None:
        """Clear all session data"""
        self._data.clear()
        self._dirty = True

    # === Authenticated User ===

    def set_user(self, user_id: str, roles: Iterable[str]) -> None:
        """
        Bind a user and role set to the session (in-memory only)

        Roles are stored as a list of unique strings so the payload stays
        JSON serializable.
        """
        self.put(USER_ID_KEY, user_id)
        self.put(USER_ROLES_KEY, list(dict.fromkeys(roles or [])))

    def user_id(self) -> Optional[str]:
        return self.get(USER_ID_KEY)

    def roles(self) -> List[str]:
        return list(self.get(USER_ROLES_KEY, []))

    def is_authenticated(self) -> bool:
        return self.user_id() is not None

    # === Session Management ===

    async def regenerate(self) -> str:
        """
        Replace this session with a fresh one

        The prior record is destroyed in the store, the payload is cleared
        and a new identifier is allocated.

        Returns:
            New session ID

        Raises:
            SessionStoreError: the store rejected the destroy
        """
        from storefront.defaults import DEFAULT_SESSION_ID_LENGTH
        old_id = self.session_id

        try:
            destroyed = await self.store.destroy(old_id)
        except Exception as e:
            logger.error("Session regeneration failed", extra={'error': str(e)})
            raise SessionStoreError(f"Session regeneration failed: {e}", session_id=old_id) from e

        if not destroyed:
            logger.error("Session regeneration failed", extra={'error': 'store rejected destroy'})
            raise SessionStoreError("Session regeneration failed", session_id=old_id)

        self.session_id = Crypto.generate_token(DEFAULT_SESSION_ID_LENGTH)
        self._data = {}
        self._loaded = True
        self._dirty = True
        return self.session_id

    async def invalidate(self) -> str:
        """
        Flush session and regenerate ID

        Returns:
            New session ID
        """
        self.flush()
        return await self.regenerate()

    def get_id(self) -> str:
        """Get current session ID"""
        return self.session_id

    def is_dirty(self) -> bool:
        return self._dirty

    # === Persistence ===

    async def save(self) -> bool:
        """
        Submit session data to storage

        Completion does not guarantee that a following read observes the
        write on every backend.

        Returns:
            True if successful

        Raises:
            SessionStoreError: the write failed
        """
        if not self._dirty:
            return True

        self._data['_expire_at'] = time.time() + self.lifetime

        try:
            success = await self.store.upsert(self.session_id, self._data)
        except Exception as e:
            logger.error("Session save failed", extra={'error': str(e)})
            raise SessionStoreError(f"Session save failed: {e}", session_id=self.session_id) from e

        if not success:
            logger.error("Session save failed", extra={'error': 'store rejected write'})
            raise SessionStoreError("Session save failed", session_id=self.session_id)

        self._dirty = False
        return True

    # === Dictionary Interface ===

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.put(key, value)

    def __delitem__(self, key: str) -> None:
        self.forget(key)

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __repr__(self) -> str:
        return f"<SessionManager id={self.session_id[:8]}... data={len(self._data)} keys>"
