"""
Storefront Helper Functions
Centralized user-facing helpers for easy access throughout the application
"""


# ==============================================================================
# Security Helpers
# ==============================================================================

def app_secret() -> str:
    """
    Get the secret used to sign session cookies and derive CSRF tokens

    Outside production a random per-process secret is generated when
    SESSION_SECRET is not set; sessions then do not survive a restart.

    Raises:
        ValueError: no secret configured in production
    """
    from storefront.support import Config, Crypto
    from storefront.logging import getLogger

    secret = Config.get('app.APP_SECRET_KEY')
    if secret:
        return secret

    if Config.get('app.APP_ENV', 'development') == 'production':
        raise ValueError(
            "SESSION_SECRET is required in production!\n"
            "Set SESSION_SECRET in the environment or the .env file"
        )

    secret = Crypto.generate_secret(32)
    Config.set('app.APP_SECRET_KEY', secret)
    getLogger('security').warning("SESSION_SECRET not set, using a generated secret")
    return secret
