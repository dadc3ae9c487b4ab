"""
Auth Service
Handles user authentication against the password hashes in the user table
"""
from typing import Optional
from storefront.logging import getLogger
from storefront.support import Crypto


class AuthService:

    def __init__(self, user_model):
        """
        Initialize auth service

        Args:
            user_model: Model class with find_by_email() (default app wiring uses User)
        """
        self.user_model = user_model
        self.logger = getLogger('security')

    async def authenticate(self, email: str, password: str) -> Optional[any]:
        """
        Authenticate user with email and password (timing-attack resistant)

        Returns:
            User instance or None
        """
        user = await self.user_model.find_by_email(email)

        # Use dummy hash if user not found (prevents timing attack)
        password_hash = user.password_hash if user else Crypto._DUMMY_HASH

        # Always verify password (constant time whether user exists or not)
        if not await Crypto.verify_password_async(password, password_hash):
            self.logger.warning("Failed login attempt", extra={'email': email})
            return None

        return user
