"""
Database Session Store
Stores sessions in the `sessions` table through Tortoise ORM
"""
import time
from typing import Any, Dict, Optional
from storefront.session.models import SessionRecordModel
from storefront.session.record import SessionRecord
from storefront.session.store import SessionStore


class DatabaseSessionStore(SessionStore):
    """
    Database-backed session storage

    Database errors are not caught here: the session manager turns write
    failures into SessionStoreError and the readiness protocol logs read
    failures per attempt.
    """

    def __init__(self, model=SessionRecordModel):
        """
        Initialize database session store

        Args:
            model: Tortoise model class backing the store
        """
        self.model = model

    async def find(self, session_id: str) -> Optional[SessionRecord]:
        """Point lookup by primary key, skipping expired rows"""
        row = await self.model.filter(sid=session_id, expire_at__gt=time.time()).first()
        if row is None:
            return None

        return SessionRecord(
            session_id=row.sid,
            data=row.sess or {},
            updated_at=row.updated_at,
            expire_at=row.expire_at,
        )

    async def upsert(self, session_id: str, data: Dict[str, Any]) -> bool:
        """Insert or replace the session row"""
        await self.model.update_or_create(
            defaults={
                'sess': data,
                'expire_at': self.expire_at_for(data),
                'updated_at': time.time(),
            },
            sid=session_id,
        )
        return True

    async def destroy(self, session_id: str) -> bool:
        """Delete the session row"""
        await self.model.filter(sid=session_id).delete()
        return True

    async def gc(self, max_lifetime: int) -> int:
        """Delete expired rows"""
        return await self.model.filter(expire_at__lte=time.time()).delete()
