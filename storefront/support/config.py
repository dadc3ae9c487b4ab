"""
Config Manager - dot notation configuration access
Access config modules using dot notation
"""

import importlib
import threading
from typing import Any, Optional, Dict


class Config:
    """
    Configuration manager with dot notation access

    Usage:
        # Get config value
        lifetime = Config.get('session.LIFETIME')
        attempts = Config.get('session.VERIFY_MAX_ATTEMPTS', 10)

        # Set runtime value
        Config.set('app.APP_DEBUG', True)

        # Check existence
        if Config.has('app.APP_SECRET_KEY'):
            ...

    Config modules live in the storefront.config package by default:
        storefront/config/
        ├── app.py
        ├── database.py
        ├── logging_config.py
        ├── security.py
        └── session.py

    Applications can point Config at their own package with
    Config.use_namespace('config').
    """

    _lock = threading.Lock()
    _namespace: str = 'storefront.config'
    _loaded: Dict[str, Any] = {}
    _runtime_overrides: Dict[str, Any] = {}

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation (case-insensitive)

        Args:
            key: Config key in dot notation (e.g., 'app.APP_ENV', 'session.LIFETIME')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            env = Config.get('app.APP_ENV', 'development')
            env = Config.get('APP.app_env', 'development')  # Same result
        """
        key_lower = key.lower()

        # Runtime overrides win over module values
        if key_lower in cls._runtime_overrides:
            return cls._runtime_overrides[key_lower]

        parts = key_lower.split('.')
        file_name = parts[0]
        path = parts[1:]

        if file_name not in cls._loaded:
            cls._load_config_file(file_name)

        value = cls._loaded.get(file_name)

        if value is None:
            return default

        for part in path:
            value = cls._lookup(value, part)
            if value is _MISSING:
                return default

        return value

    @staticmethod
    def _lookup(container: Any, part: str) -> Any:
        """Case-insensitive attribute or dict key lookup"""
        if isinstance(container, dict):
            for dict_key in container.keys():
                if str(dict_key).lower() == part:
                    return container[dict_key]
            return _MISSING

        if hasattr(container, '__dict__'):
            for attr_name in dir(container):
                if attr_name.lower() == part:
                    return getattr(container, attr_name)

        return _MISSING

    @classmethod
    def _load_config_file(cls, file_name: str):
        """
        Load a config module from the configured namespace

        Args:
            file_name: Config module name (without .py extension)
        """
        with cls._lock:
            if file_name in cls._loaded:
                return

            try:
                module = importlib.import_module(f'{cls._namespace}.{file_name}')
                cls._loaded[file_name] = module
            except ImportError:
                # Config module doesn't exist
                cls._loaded[file_name] = None

    @classmethod
    def set(cls, key: str, value: Any):
        """
        Set configuration value at runtime (does not persist)

        Example:
            Config.set('session.VERIFY_MAX_ATTEMPTS', 20)
        """
        cls._runtime_overrides[key.lower()] = value

    @classmethod
    def has(cls, key: str) -> bool:
        """Check if configuration key exists"""
        return cls.get(key) is not None

    @classmethod
    def all(cls, file_name: str) -> Optional[Any]:
        """
        Get a whole config module

        Example:
            session_config = Config.all('session')
            print(session_config.LIFETIME)
        """
        if file_name not in cls._loaded:
            cls._load_config_file(file_name)

        return cls._loaded.get(file_name)

    @classmethod
    def use_namespace(cls, namespace: str):
        """
        Load config modules from another package and drop everything loaded so far

        Args:
            namespace: Importable package name (e.g. 'config')
        """
        with cls._lock:
            cls._namespace = namespace
            cls._loaded.clear()

    @classmethod
    def reload(cls, file_name: Optional[str] = None):
        """
        Reload configuration module(s)

        Args:
            file_name: Specific module to reload, or None to reload all
        """
        with cls._lock:
            names = [file_name] if file_name else list(cls._loaded.keys())
            for name in names:
                module = cls._loaded.pop(name, None)
                if module is not None:
                    cls._loaded[name] = importlib.reload(module)

    @classmethod
    def clear_runtime_overrides(cls):
        """Clear all runtime configuration overrides"""
        cls._runtime_overrides.clear()


class _Missing:
    def __repr__(self):
        return '<missing>'


_MISSING = _Missing()
