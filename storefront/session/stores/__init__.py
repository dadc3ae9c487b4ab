"""
Session storage drivers
"""
from storefront.session.stores.array_store import ArraySessionStore
from storefront.session.stores.file_store import FileSessionStore
from storefront.session.stores.database_store import DatabaseSessionStore

__all__ = [
    'ArraySessionStore',
    'FileSessionStore',
    'DatabaseSessionStore',
]
