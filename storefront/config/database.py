"""
Database configuration
"""
from storefront.support.env_helper import EnvHelper
from storefront import defaults

DATABASE_URL = EnvHelper.get('DATABASE_URL', defaults.DEFAULT_DATABASE_URL)

MODELS = [
    'storefront.auth.models.user',
    'storefront.session.models',
]

GENERATE_SCHEMAS = EnvHelper.get_bool('DATABASE_GENERATE_SCHEMAS', True)
