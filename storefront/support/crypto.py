"""
Crypto - Centralized cryptography operations
Provides password hashing, token generation, CSRF tokens and signed cookie values
"""
import secrets
import hmac
import hashlib
import bcrypt
import asyncio
from concurrent.futures import ThreadPoolExecutor
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from typing import Optional

# Thread pool for CPU-intensive bcrypt operations
_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="bcrypt_")


class Crypto:
    """Centralized cryptography helper"""

    # Dummy hash for timing attack prevention
    _DUMMY_HASH = '$2b$12$KIXbF3UGaGm.IhBW8D8VluZJMVZbF5aXpMJPgHw5Z3yE1xYvK5W0a'  # compared against when the user is unknown

    _SESSION_COOKIE_SALT = 'storefront.session'

    # === Password Hashing (bcrypt) ===

    @staticmethod
    def hash_password(password: str, rounds: int = None) -> str:
        """
        Hash password using bcrypt (synchronous, for provisioning user rows)

        Args:
            password: Plain text password
            rounds: Number of bcrypt rounds (default: from config)

        Returns:
            Hashed password string
        """
        if rounds is None:
            from storefront.support.config import Config
            from storefront.defaults import DEFAULT_BCRYPT_ROUNDS
            rounds = Config.get('security.BCRYPT_ROUNDS', DEFAULT_BCRYPT_ROUNDS)

        return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds)).decode('utf-8')

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        """
        Verify password against bcrypt hash (synchronous - use verify_password_async for async contexts)

        Returns:
            True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
        except (ValueError, TypeError):
            return False

    @staticmethod
    async def verify_password_async(password: str, hashed: str) -> bool:
        """Verify password against bcrypt hash in thread pool (non-blocking async)"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            _executor,
            lambda: Crypto.verify_password(password, hashed)
        )

    # === CSRF Token Generation (HMAC) ===

    @staticmethod
    def generate_csrf_token(session_id: str, secret_key: str) -> str:
        """
        Derive the CSRF token for a session using HMAC-SHA256

        The token is only meaningful once the session it is derived from
        is visible in the durable store.

        Args:
            session_id: Session identifier the token is bound to
            secret_key: Secret key for HMAC

        Returns:
            Hex encoded token
        """
        return hmac.new(
            secret_key.encode(),
            session_id.encode(),
            hashlib.sha256
        ).hexdigest()

    @staticmethod
    def verify_csrf_token(token: str, session_id: str, secret_key: str) -> bool:
        """
        Verify CSRF token against the session it should be bound to

        Returns:
            True if token is valid, False otherwise
        """
        if not token or not session_id:
            return False

        expected = Crypto.generate_csrf_token(session_id, secret_key)
        return hmac.compare_digest(token.encode('utf-8', 'surrogateescape'), expected.encode())

    # === Signed Data (itsdangerous) ===

    @staticmethod
    def create_serializer(secret_key: str, salt: str = None) -> URLSafeTimedSerializer:
        """Create URL-safe timed serializer"""
        return URLSafeTimedSerializer(secret_key, salt=salt or Crypto._SESSION_COOKIE_SALT)

    @staticmethod
    def sign_data(data: str, secret_key: str) -> str:
        """
        Sign data with secret key using itsdangerous

        Example:
            cookie_value = Crypto.sign_data(session_id, secret)
        """
        return Crypto.create_serializer(secret_key).dumps(data)

    @staticmethod
    def verify_signed_data(signed_data: str, secret_key: str, max_age: int = None) -> Optional[str]:
        """
        Verify and extract signed data

        Args:
            signed_data: Signed data string
            secret_key: Secret key
            max_age: Maximum age in seconds (None disables the age check)

        Returns:
            Original data if valid, None otherwise
        """
        serializer = Crypto.create_serializer(secret_key)
        try:
            return serializer.loads(signed_data, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None

    # === Random Tokens ===

    @staticmethod
    def generate_token(length: int = 32) -> str:
        """
        Generate URL-safe random token

        Args:
            length: Length of token in bytes (default: 32)

        Returns:
            URL-safe random string
        """
        return secrets.token_urlsafe(length)

    @staticmethod
    def generate_id(size: int = 10) -> str:
        """
        Generate a short URL-safe identifier of exactly `size` characters

        Used for request ids in log lines.
        """
        return secrets.token_urlsafe(size)[:size]

    @staticmethod
    def generate_secret(length: int = 32) -> str:
        """Generate random hex secret"""
        return secrets.token_hex(length)
