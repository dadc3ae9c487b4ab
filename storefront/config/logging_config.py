"""
Logging configuration
"""
from storefront.support.env_helper import EnvHelper
from storefront import defaults

LOG_MAX_BYTES = EnvHelper.get_int('LOG_MAX_BYTES', defaults.DEFAULT_LOG_MAX_BYTES)
LOG_BACKUP_COUNT = EnvHelper.get_int('LOG_BACKUP_COUNT', defaults.DEFAULT_LOG_BACKUP_COUNT)
FILTER_SENSITIVE = True
