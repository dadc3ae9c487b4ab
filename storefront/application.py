"""
Storefront Application
Builds the Sanic app: middleware stack, session store, auth routes and database lifecycle
"""
from typing import Optional
from sanic import Sanic
from storefront.auth import AuthController, AuthService
from storefront.logging import LoggerConfig, getLogger
from storefront.middleware import (
    AuthMiddleware,
    CorsMiddleware,
    CsrfMiddleware,
    RequestLoggerMiddleware,
    SessionMiddleware,
)
from storefront.service_middleware import ServiceMiddleware
from storefront.session.readiness import SessionReadiness
from storefront.session.store import SessionStore
from storefront.support import Config, EnvHelper, Storage


def create_app(
    name: Optional[str] = None,
    store: Optional[SessionStore] = None,
    user_model=None,
    init_db: bool = True,
    configure_logging: bool = True,
    readiness: Optional[SessionReadiness] = None
) -> Sanic:
    """
    Create the storefront Sanic application

    Middleware order: request logger, CORS, session, CSRF, auth.

    Args:
        name: Sanic app name (default: app.APP_NAME)
        store: Session store (default: built from session.DRIVER)
        user_model: Model used for authentication (default: User)
        init_db: Initialize Tortoise ORM before the server starts
        configure_logging: Attach file handlers to the log channels
        readiness: Readiness protocol (default: bound to the session store)

    Example:
        app = create_app()
        app.run(host='0.0.0.0', port=8000)
    """
    Storage.initialize()
    EnvHelper.initialize(Storage.base('.env'))

    if configure_logging:
        LoggerConfig.setup_application_loggers()

    logger = getLogger('application')

    app = Sanic(name or Config.get('app.APP_NAME', 'storefront'))
    # Our own middleware handles CORS; keep sanic-ext out of the way
    app.config.AUTO_EXTEND = False

    debug = Config.get('app.APP_DEBUG', False)

    session_middleware = SessionMiddleware._register_middleware(store=store)

    middleware = ServiceMiddleware(app)
    middleware.add(RequestLoggerMiddleware._register_middleware(), 'request_logger')
    middleware.add(CorsMiddleware._register_middleware(), 'cors')
    middleware.add(session_middleware, 'session')
    middleware.add(CsrfMiddleware._register_middleware(), 'csrf')
    middleware.add(AuthMiddleware._register_middleware(), 'auth')
    middleware.register_with_sanic(debug=debug)

    if user_model is None:
        from storefront.auth.models import User
        user_model = User

    readiness = readiness or SessionReadiness(session_middleware.store)
    controller = AuthController(AuthService(user_model), readiness)

    app.add_route(controller.login, '/api/auth/login', methods=['POST'], name='auth_login')
    app.add_route(controller.logout, '/api/auth/logout', methods=['POST'], name='auth_logout')
    app.add_route(controller.me, '/api/auth/me', methods=['GET'], name='auth_me')

    app.ctx.middleware = middleware
    app.ctx.readiness = readiness
    app.ctx.session_store = session_middleware.store

    if init_db:
        from storefront.database import DatabaseManager
        database = DatabaseManager()
        app.ctx.database = database

        @app.before_server_start
        async def init_database(app, _):
            await database.init()

        @app.after_server_stop
        async def close_database(app, _):
            await database.close()

    logger.info("Application created", extra={
        'middleware': middleware.names(),
        'session_store': session_middleware.store.__class__.__name__,
        'environment': Config.get('app.APP_ENV', 'development'),
    })

    return app
