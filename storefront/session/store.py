"""
Session Store Interface
Base class for all session storage drivers
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from storefront.session.record import SessionRecord


class SessionStore(ABC):
    """
    Base session store interface

    `find` must be a real read against the backing store: the readiness
    protocol relies on it to observe committed writes.
    """

    @abstractmethod
    async def find(self, session_id: str) -> Optional[SessionRecord]:
        """
        Point lookup of a session record

        Args:
            session_id: Session identifier

        Returns:
            The record, or None if missing or expired
        """
        pass

    @abstractmethod
    async def upsert(self, session_id: str, data: Dict[str, Any]) -> bool:
        """
        Insert or replace session data (idempotent by session id)

        Args:
            session_id: Session identifier
            data: Session data to store (may carry '_expire_at')

        Returns:
            True if successful
        """
        pass

    @abstractmethod
    async def destroy(self, session_id: str) -> bool:
        """
        Delete session from storage

        Returns:
            True if successful (deleting a missing session is successful)
        """
        pass

    @abstractmethod
    async def gc(self, max_lifetime: int) -> int:
        """
        Garbage collection - remove expired sessions

        Args:
            max_lifetime: Maximum session lifetime in seconds

        Returns:
            Number of sessions deleted
        """
        pass

    async def read(self, session_id: str) -> Dict[str, Any]:
        """
        Read session data

        Returns:
            Session data dictionary (empty if the session does not exist)
        """
        record = await self.find(session_id)
        return dict(record.data) if record else {}

    async def exists(self, session_id: str) -> bool:
        """Check if session exists"""
        return await self.find(session_id) is not None

    @staticmethod
    def expire_at_for(data: Dict[str, Any]) -> float:
        """Resolve the expiry timestamp for a payload"""
        import time
        from storefront.defaults import DEFAULT_SESSION_LIFETIME
        return float(data.get('_expire_at', time.time() + DEFAULT_SESSION_LIFETIME))
