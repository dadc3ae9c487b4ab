"""
Array Session Store
Stores sessions in memory (for testing only)
"""
import copy
import time
from typing import Any, Dict, Optional
from storefront.session.record import SessionRecord
from storefront.session.store import SessionStore


class ArraySessionStore(SessionStore):
    """
    In-memory session storage

    WARNING: Not suitable for production use.
    Sessions are lost when the application restarts.
    """

    def __init__(self):
        """Initialize array session store"""
        self._sessions: Dict[str, SessionRecord] = {}

    async def find(self, session_id: str) -> Optional[SessionRecord]:
        """Find session in memory"""
        record = self._sessions.get(session_id)
        if record is None or record.is_expired():
            return None
        return copy.deepcopy(record)

    async def upsert(self, session_id: str, data: Dict[str, Any]) -> bool:
        """Write session to memory"""
        self._sessions[session_id] = SessionRecord(
            session_id=session_id,
            data=copy.deepcopy(data),
            updated_at=time.time(),
            expire_at=self.expire_at_for(data),
        )
        return True

    async def destroy(self, session_id: str) -> bool:
        """Delete session from memory"""
        self._sessions.pop(session_id, None)
        return True

    async def gc(self, max_lifetime: int) -> int:
        """Drop expired sessions"""
        now = time.time()
        expired = [sid for sid, record in self._sessions.items() if record.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def clear_all(self):
        """Clear all sessions (useful for testing)"""
        self._sessions.clear()
