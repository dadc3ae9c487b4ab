"""
EnvHelper - Read .env files
Environment variable access used by the config modules
"""

import os
import threading
from typing import Optional, Any, TYPE_CHECKING
from dotenv import load_dotenv

if TYPE_CHECKING:
    from pathlib import Path


class EnvHelper:
    """
    Environment variable manager with .env file support

    Usage:
        # Read
        value = EnvHelper.get('APP_NAME', 'Storefront')

        # Typed reads
        debug = EnvHelper.get_bool('APP_DEBUG', False)
        attempts = EnvHelper.get_int('SESSION_VERIFY_MAX_ATTEMPTS', 10)

        # Load
        EnvHelper.load(Path('/path/to/.env'))
    """

    _lock = threading.Lock()
    _env_path: Optional['Path'] = None
    _loaded: bool = False

    @classmethod
    def initialize(cls, env_path: Optional['Path'] = None):
        """
        Initialize EnvHelper

        Args:
            env_path: Path to .env file (defaults to .env in project root)
        """
        if env_path is None:
            from storefront.support.storage import Storage
            env_path = Storage.base('.env')

        cls._env_path = env_path

    @classmethod
    def load(cls, env_path: Optional['Path'] = None, override: bool = False) -> bool:
        """
        Load .env file into environment

        Args:
            env_path: Path to .env file (defaults to initialized path)
            override: Whether to override existing environment variables

        Returns:
            bool: True if a .env file was found and loaded
        """
        with cls._lock:
            if env_path:
                cls._env_path = env_path

            if cls._env_path is None:
                cls.initialize()

            cls._loaded = True

            if not cls._env_path.exists():
                return False

            load_dotenv(cls._env_path, override=override)
            return True

    @classmethod
    def get(cls, key: str, default: Any = None) -> Optional[str]:
        """
        Get environment variable value

        Example:
            frontend = EnvHelper.get('FRONTEND_URL')
        """
        if not cls._loaded:
            cls.load()

        return os.getenv(key, default)

    @classmethod
    def get_bool(cls, key: str, default: bool = False) -> bool:
        """Get boolean environment variable"""
        value = cls.get(key)
        if value is None:
            return default

        return value.lower() in ('true', '1', 'yes', 'on')

    @classmethod
    def get_int(cls, key: str, default: int = 0) -> int:
        """Get integer environment variable"""
        value = cls.get(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            return default

    @classmethod
    def get_float(cls, key: str, default: float = 0.0) -> float:
        """Get float environment variable"""
        value = cls.get(key)
        if value is None:
            return default

        try:
            return float(value)
        except ValueError:
            return default

    @classmethod
    def get_list(cls, key: str, default: Optional[list] = None) -> list:
        """Get comma separated environment variable as a list (empty items dropped)"""
        value = cls.get(key)
        if value is None:
            return list(default or [])

        return [item.strip() for item in value.split(',') if item.strip()]
