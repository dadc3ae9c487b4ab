"""
Application configuration
"""
from storefront.support.env_helper import EnvHelper

APP_NAME = EnvHelper.get('APP_NAME', 'storefront')
APP_ENV = EnvHelper.get('APP_ENV', EnvHelper.get('NODE_ENV', 'development'))
APP_DEBUG = EnvHelper.get_bool('APP_DEBUG', APP_ENV == 'development')
APP_HOST = EnvHelper.get('APP_HOST', '0.0.0.0')
APP_PORT = EnvHelper.get_int('APP_PORT', 8000)

# Shared secret for session cookie signing and CSRF token derivation
APP_SECRET_KEY = EnvHelper.get('SESSION_SECRET')

# Logger channels that may be requested by short name through getLogger()
ALLOWED_LOGGING_HANDLERS = {
    'application': {'name': 'application', 'format': 'json'},
    'requests': {'name': 'requests', 'format': 'text'},
    'security': {'name': 'security', 'format': 'json'},
}
