"""
Service Middleware
Runs the middleware stack and the centralized error handler on a Sanic app
"""
from sanic import Sanic
from typing import List, Optional, Tuple
from storefront.middleware.base_middleware import Middleware


class ServiceMiddleware:
    """Manages middleware registration and execution"""

    def __init__(self, sanic_app: Sanic):
        self.sanic_app = sanic_app
        self.middlewares: List[Tuple[Middleware, Optional[str]]] = []

    def add(self, middleware_instance: Optional[Middleware], name: str = None):
        """
        Add a middleware to the stack

        Disabled middlewares (None from _register_middleware) are ignored.
        """
        if middleware_instance is None:
            return
        self.middlewares.append((middleware_instance, name))

    def names(self) -> List[str]:
        return [name or middleware.__class__.__name__ for middleware, name in self.middlewares]

    def register_with_sanic(self, debug: bool = False):
        """Register middlewares and the exception handler with the Sanic app"""
        from storefront.exceptions.error_handler import ErrorHandler

        error_handler = ErrorHandler(debug=debug)

        @self.sanic_app.exception(Exception)
        async def handle_exception(request, exception):
            """Handle all exceptions through centralized error handler"""
            return await error_handler.handle_error(request, exception)

        @self.sanic_app.on_request
        async def process_request(request):
            # Track which middlewares actually ran for this request
            request.ctx._executed_middlewares = []

            for middleware_instance, _ in self.middlewares:
                request.ctx._executed_middlewares.append(middleware_instance)

                result = await middleware_instance.before_request(request)
                if result is not None:
                    return result  # Short-circuit
            return None

        @self.sanic_app.on_response
        async def process_response(request, resp):
            # Only run after_response for middlewares that ran before_request
            executed_middlewares = getattr(request.ctx, '_executed_middlewares', [])

            for middleware in reversed(executed_middlewares):
                resp = await middleware.after_response(request, resp)

            return resp
