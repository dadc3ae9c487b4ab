"""
Database Package
Tortoise ORM base model and connection management
"""
from storefront.database.model import Model
from storefront.database.database_manager import DatabaseManager

__all__ = [
    'Model',
    'DatabaseManager',
]
