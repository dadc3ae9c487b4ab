"""
Storage - Centralized path management
Provides consistent path resolution across the application
"""

import os
from pathlib import Path
from typing import Union


class Storage:
    """
    Centralized path management helper

    Directory structure:
    /
    ├── .env                # Environment overrides
    ├── storage/            # File storage
    │   ├── sessions/       # File session driver
    │   ├── logs/           # Log files
    │   └── database/       # SQLite database files
    └── main.py             # Application entry point
    """

    _base_path: Path = None
    _storage_path: Path = None

    @classmethod
    def initialize(cls, base_path: Union[str, Path] = None):
        """
        Initialize paths (should be called during app startup)

        Args:
            base_path: Application base directory (defaults to current working directory)
        """
        if base_path is None:
            base_path = os.getcwd()

        cls._base_path = Path(base_path).resolve()
        cls._storage_path = cls._base_path / 'storage'

    @classmethod
    def base(cls, *paths: str) -> Path:
        """
        Get path relative to the application base directory

        Example:
            Storage.base('.env')
        """
        if cls._base_path is None:
            cls.initialize()
        return cls._base_path.joinpath(*paths)

    @classmethod
    def storage(cls, *paths: str) -> Path:
        """Get path inside storage/"""
        if cls._storage_path is None:
            cls.initialize()
        return cls._storage_path.joinpath(*paths)

    @classmethod
    def sessions(cls, *paths: str) -> Path:
        """Get path inside storage/sessions/"""
        return cls.storage('sessions', *paths)

    @classmethod
    def database(cls, *paths: str) -> Path:
        """Get path inside storage/database/"""
        return cls.storage('database', *paths)

    @classmethod
    def logs(cls, *paths: str) -> Path:
        """Get path inside storage/logs/"""
        return cls.storage('logs', *paths)

    @classmethod
    def ensure_directory(cls, path: Union[str, Path]) -> Path:
        """
        Create directory (and parents) if it does not exist

        Returns:
            The directory path
        """
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)
        return path
