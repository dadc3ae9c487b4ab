"""
Request Logger Middleware
Tags every request with a short id and logs its outcome

Line format: [<request id>] METHOD path status - Nms
"""
import time
from sanic import Request
from storefront.logging import getLogger
from storefront.middleware.base_middleware import Middleware
from storefront.support import Crypto


class RequestLoggerMiddleware(Middleware):
    """Middleware to log completed requests with their duration"""

    ENABLED_CONFIG_KEY = 'app.REQUEST_LOGGING_ENABLED'
    CONFIG_MAPPING = {
        'environment': ('app.APP_ENV', 'development'),
    }
    DEFAULT_ENABLED = True

    REQUEST_ID_HEADER = 'X-Request-Id'

    def __init__(self, environment: str = 'development', id_length: int = None):
        from storefront.defaults import DEFAULT_REQUEST_ID_LENGTH
        self.environment = environment
        self.id_length = id_length or DEFAULT_REQUEST_ID_LENGTH
        self.logger = getLogger('requests')

    async def before_request(self, request: Request):
        request.ctx.request_id = Crypto.generate_id(self.id_length)
        request.ctx.request_started = time.perf_counter()
        return None

    async def after_response(self, request: Request, response):
        """Log the request and echo its id back to the client"""
        request_id = getattr(request.ctx, 'request_id', None)
        if response is None or request_id is None:
            return response

        duration_ms = int((time.perf_counter() - request.ctx.request_started) * 1000)
        status = response.status

        message = f"[{request_id}] {request.method} {request.path} {status} - {duration_ms}ms"
        extra = {
            'request_id': request_id,
            'method': request.method,
            'path': request.path,
            'status_code': status,
            'duration_ms': duration_ms,
        }

        if status >= 500:
            self.logger.error(message, extra=extra)
        elif status >= 400:
            self.logger.warning(message, extra=extra)
        elif self.environment == 'development':
            # Successful requests are only noise outside development
            self.logger.info(message, extra=extra)

        response.headers[self.REQUEST_ID_HEADER] = request_id
        return response
