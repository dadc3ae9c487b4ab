"""
Base Middleware Class
Abstract base class for all middlewares
"""
from abc import ABC, abstractmethod
from sanic import Request
from typing import Optional, Dict, Any


class Middleware(ABC):
    """
    Base middleware class

    Middlewares can:
    - Inspect/modify requests before they reach routes
    - Inspect/modify responses before they're sent
    - Short-circuit requests (return response early)

    Configuration:
    Subclasses can set these class variables for automatic configuration:
    - ENABLED_CONFIG_KEY: Config key to check if middleware is enabled
    - CONFIG_MAPPING: Dict mapping constructor params to config keys
    - DEFAULT_ENABLED: Default enabled state if config key not found
    - STATIC_PARAMS: Static parameters that don't come from config
    """

    ENABLED_CONFIG_KEY: str = None
    CONFIG_MAPPING: Dict[str, tuple] = {}
    DEFAULT_ENABLED: bool = True
    STATIC_PARAMS: Dict[str, Any] = {}

    @classmethod
    def _is_enabled(cls) -> bool:
        """
        Hook for custom enabled check logic

        By default, checks ENABLED_CONFIG_KEY from config.
        """
        from storefront.support import Config

        if cls.ENABLED_CONFIG_KEY:
            return Config.get(cls.ENABLED_CONFIG_KEY, cls.DEFAULT_ENABLED)

        return cls.DEFAULT_ENABLED

    @classmethod
    def _load_config_params(cls) -> Dict[str, Any]:
        """Resolve constructor parameters from CONFIG_MAPPING"""
        from storefront.support import Config

        return {
            param_name: Config.get(config_key, default_value)
            for param_name, (config_key, default_value) in cls.CONFIG_MAPPING.items()
        }

    @classmethod
    def _register_middleware(cls, **static_params) -> Optional['Middleware']:
        """
        Factory method to create middleware instance from configuration

        1. Check if it should be enabled (via _is_enabled hook)
        2. Load configuration parameters from CONFIG_MAPPING
        3. Merge STATIC_PARAMS and the given keyword arguments
        4. Return configured instance or None if disabled

        Returns:
            Middleware instance if enabled, None otherwise
        """
        if not cls._is_enabled():
            return None

        all_params = {**cls._load_config_params(), **cls.STATIC_PARAMS, **static_params}

        return cls(**all_params)

    @abstractmethod
    async def before_request(self, request: Request):
        """
        Called before the request reaches the route handler

        Returns:
            None: Continue to next middleware/route
            HTTPResponse: Short-circuit and return response immediately
        """
        pass

    async def after_response(self, request: Request, response):
        """
        Called after the route handler, before sending response

        Returns:
            response: Modified or original response
        """
        return response
