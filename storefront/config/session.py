"""
Session configuration
"""
from storefront.support.env_helper import EnvHelper
from storefront import defaults

DRIVER = EnvHelper.get('SESSION_DRIVER', defaults.DEFAULT_SESSION_DRIVER)
LIFETIME = EnvHelper.get_int('SESSION_LIFETIME', defaults.DEFAULT_SESSION_LIFETIME)

COOKIE_NAME = EnvHelper.get('SESSION_COOKIE_NAME', defaults.DEFAULT_SESSION_COOKIE_NAME)
COOKIE_PATH = '/'
COOKIE_DOMAIN = EnvHelper.get('SESSION_COOKIE_DOMAIN')
COOKIE_SECURE = EnvHelper.get_bool('SESSION_COOKIE_SECURE', False)
COOKIE_HTTP_ONLY = True
COOKIE_SAME_SITE = EnvHelper.get('SESSION_COOKIE_SAME_SITE', 'Lax')

SESSION_LOTTERY = defaults.DEFAULT_SESSION_LOTTERY

# Read-after-write verification of freshly initialized sessions
VERIFY_MAX_ATTEMPTS = EnvHelper.get_int(
    'SESSION_VERIFY_MAX_ATTEMPTS', defaults.DEFAULT_SESSION_VERIFY_MAX_ATTEMPTS
)
VERIFY_INITIAL_DELAY = EnvHelper.get_float(
    'SESSION_VERIFY_INITIAL_DELAY', defaults.DEFAULT_SESSION_VERIFY_INITIAL_DELAY
)
