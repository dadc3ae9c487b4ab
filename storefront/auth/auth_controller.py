"""
Auth Controller
Handles authentication endpoints: login, logout, me
"""
from sanic import Request
from storefront.auth.requests import LoginRequest
from storefront.exceptions import AuthenticationError, NotFoundError, SessionError
from storefront.helpers import app_secret
from storefront.http import ResponseHelper
from storefront.logging import getLogger
from storefront.session.readiness import SessionReadiness
from storefront.support import Crypto


class AuthController:
    def __init__(self, auth_service, readiness: SessionReadiness):
        """
        Initialize auth controller

        Args:
            auth_service: Credential checks
            readiness: Session initialization bound to the same store as the session middleware
        """
        self.auth_service = auth_service
        self.readiness = readiness
        self.logger = getLogger('security')

    async def login(self, request: Request):
        """
        Login user

        The CSRF token is only issued once the new session is readable
        from the store. Any session failure leaves the user logged out.
        """
        validated = LoginRequest(request).validate()

        user = await self.auth_service.authenticate(validated['email'], validated['password'])
        if not user:
            raise AuthenticationError("Invalid email or password")

        session = request.ctx.session
        try:
            await self.readiness.initialize_with_user(session, str(user.id), user.roles or [])
        except SessionError as e:
            self.logger.error("Login aborted, session not ready", extra={
                'user_id': user.id,
                'error_code': e.error_code,
            })
            raise AuthenticationError("Could not establish a session, please try again") from e

        csrf_token = Crypto.generate_csrf_token(session.get_id(), app_secret())

        return ResponseHelper.success(
            {'user': user.to_dict(), 'csrfToken': csrf_token},
            "Login successful"
        )

    async def logout(self, request: Request):
        """
        Logout user

        The old record is destroyed; the CSRF cookie is cleared by CsrfMiddleware.
        """
        await request.ctx.session.invalidate()
        return ResponseHelper.success(None, "Logout successful")

    async def me(self, request: Request):
        user = await self.auth_service.user_model.find(request.ctx.user_id)
        if not user:
            raise NotFoundError("User")

        return ResponseHelper.success({'user': user.to_dict()})
