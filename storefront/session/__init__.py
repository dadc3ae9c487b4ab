"""
Session Management Package
Request sessions, storage drivers and the readiness protocol
"""
from storefront.session.record import SessionRecord
from storefront.session.store import SessionStore
from storefront.session.session_manager import SessionManager
from storefront.session.stores import ArraySessionStore, FileSessionStore, DatabaseSessionStore
from storefront.session.readiness import (
    SessionReadiness,
    ReadinessState,
    InitializationAttempt,
    CancellationToken,
    cancellable_sleep,
)

__all__ = [
    'SessionRecord',
    'SessionStore',
    'SessionManager',
    'ArraySessionStore',
    'FileSessionStore',
    'DatabaseSessionStore',
    'SessionReadiness',
    'ReadinessState',
    'InitializationAttempt',
    'CancellationToken',
    'cancellable_sleep',
]
