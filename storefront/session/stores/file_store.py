"""
File Session Store
Stores sessions as JSON files in the filesystem
"""
import json
import time
from typing import Any, Dict, Optional, TYPE_CHECKING
from storefront.logging import getLogger
from storefront.session.record import SessionRecord
from storefront.session.store import SessionStore

if TYPE_CHECKING:
    from pathlib import Path

logger = getLogger(__name__)


class FileSessionStore(SessionStore):
    """File-based session storage"""

    def __init__(self, path: 'Path'):
        """
        Initialize file session store

        Args:
            path: Path to session storage directory
        """
        self.path = path
        self.path.mkdir(parents=True, exist_ok=True)

    def _get_session_file(self, session_id: str) -> 'Path':
        """Get path to session file"""
        return self.path / f"session_{session_id}.json"

    async def find(self, session_id: str) -> Optional[SessionRecord]:
        """Read session record from file"""
        session_file = self._get_session_file(session_id)

        if not session_file.exists():
            return None

        try:
            with open(session_file, 'r') as f:
                payload = json.load(f)
        except FileNotFoundError:
            # Removed by a concurrent gc()
            return None
        except json.JSONDecodeError:
            logger.warning("Corrupted session file ignored", extra={'file': session_file.name})
            return None

        record = SessionRecord(
            session_id=session_id,
            data=payload.get('data', {}),
            updated_at=payload.get('_updated_at', 0.0),
            expire_at=payload.get('_expire_at', 0.0),
        )
        if record.is_expired():
            return None
        return record

    async def upsert(self, session_id: str, data: Dict[str, Any]) -> bool:
        """Write session to file"""
        session_file = self._get_session_file(session_id)

        try:
            payload = {
                'data': data,
                '_updated_at': time.time(),
                '_expire_at': self.expire_at_for(data),
            }
            serialized = json.dumps(payload, indent=2)

            with open(session_file, 'w') as f:
                f.write(serialized)

            return True
        except (IOError, TypeError, ValueError) as e:
            logger.error("Session file write failed", extra={'file': session_file.name, 'error': str(e)})
            return False

    async def destroy(self, session_id: str) -> bool:
        """Delete session file"""
        session_file = self._get_session_file(session_id)

        try:
            if session_file.exists():
                session_file.unlink()
            return True
        except IOError:
            return False

    async def gc(self, max_lifetime: int) -> int:
        """Remove expired and corrupted session files"""
        current_time = time.time()
        deleted = 0

        for session_file in self.path.glob('session_*.json'):
            try:
                with open(session_file, 'r') as f:
                    payload = json.load(f)

                if payload.get('_expire_at', 0) < current_time:
                    session_file.unlink()
                    deleted += 1
            except json.JSONDecodeError:
                session_file.unlink()
                deleted += 1
            except FileNotFoundError:
                # Removed concurrently
                continue

        return deleted
