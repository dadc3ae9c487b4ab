"""
Database Manager
Handles Tortoise ORM initialization and connection management
"""
from tortoise import Tortoise
from typing import Any, Dict, List
from storefront.logging import getLogger
from storefront.support import Config

logger = getLogger(__name__)


class DatabaseManager:
    """Manages database connections and Tortoise ORM"""

    def __init__(self, database_url: str = None, models: List[str] = None):
        """
        Initialize database manager

        Args:
            database_url: Tortoise connection URL (default: database.DATABASE_URL)
            models: Model modules to register (default: database.MODELS)
        """
        from storefront.defaults import DEFAULT_DATABASE_URL
        self.database_url = database_url or Config.get('database.DATABASE_URL', DEFAULT_DATABASE_URL)
        self.models = list(models or Config.get('database.MODELS', []))
        self._initialized = False
        self.app_label = 'models'

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite"""
        return self.database_url.startswith("sqlite")

    @property
    def is_memory(self) -> bool:
        return self.database_url.endswith(':memory:')

    def get_config(self) -> Dict[str, Any]:
        """Get Tortoise configuration"""
        return {
            "connections": {"default": self.database_url},
            "apps": {
                self.app_label: {
                    "models": self.models,
                    "default_connection": "default",
                }
            },
        }

    async def init(self, generate_schemas: bool = None):
        """
        Initialize Tortoise ORM

        Args:
            generate_schemas: Create missing tables (default: database.GENERATE_SCHEMAS)
        """
        if self._initialized:
            return

        if self.is_sqlite and not self.is_memory:
            from storefront.support import Storage
            Storage.ensure_directory(Storage.database())

        await Tortoise.init(self.get_config())

        if self.is_sqlite and not self.is_memory:
            await self._setup_sqlite_pragmas()

        if generate_schemas is None:
            generate_schemas = Config.get('database.GENERATE_SCHEMAS', True)
        if generate_schemas:
            await self.generate_schemas(safe=True)

        self._initialized = True
        logger.info("Database initialized", extra={'models': self.models})

    async def _setup_sqlite_pragmas(self):
        """Setup SQLite performance optimizations"""
        connection = Tortoise.get_connection("default")

        # WAL lets session reads proceed while a write is in flight
        await connection.execute_query("PRAGMA journal_mode=WAL")
        await connection.execute_query("PRAGMA synchronous=NORMAL")
        await connection.execute_query("PRAGMA foreign_keys=ON")

    async def generate_schemas(self, safe: bool = True):
        """
        Generate database schemas

        Args:
            safe: If True, don't drop existing tables
        """
        await Tortoise.generate_schemas(safe=safe)

    async def close(self):
        """Close database connections"""
        if self._initialized:
            await Tortoise.close_connections()
            self._initialized = False
