"""
Logging Package
Rotating JSON log channels with sensitive data redaction

Use getLogger() instead of logging.getLogger() so short names resolve
only to the configured channels.
"""
import logging
from typing import List, Optional
from storefront.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
    SensitiveDataFilter
)

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'SensitiveDataFilter',
    'getLogger',
]


def _channel_names() -> List[str]:
    from storefront.support import Config
    channels = Config.get('app.ALLOWED_LOGGING_HANDLERS', {})
    return [c['name'] for c in channels.values() if c.get('name')]


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger for a module or a configured channel

    Accepted names:
    - dotted module names (`__name__`), written to the application log
    - channel names from app.ALLOWED_LOGGING_HANDLERS ('application', 'requests', 'security')
    - sanic.* loggers

    Any other short name falls back to the root logger.

    Example:
        logger = getLogger(__name__)
        logger.warning("Session not found in store", extra={'attempt': 2})

        getLogger('security').warning("CSRF check failed", extra={'path': path})
    """
    if name is None or '.' in name:
        return logging.getLogger(name)

    if name not in _channel_names():
        name = None

    return logging.getLogger(name)
