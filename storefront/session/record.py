"""
Session Record
Store-side projection of a session
"""
import time
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class SessionRecord:
    """
    A session as the durable store sees it

    The request owns the in-memory payload (SessionManager) until it is
    persisted; from then on the store owns this record.
    """

    session_id: str
    data: Dict[str, Any] = field(default_factory=dict)
    updated_at: float = field(default_factory=time.time)
    expire_at: float = 0.0

    def is_expired(self, now: float = None) -> bool:
        """Check if the record is past its expiry timestamp"""
        return self.expire_at <= (time.time() if now is None else now)
