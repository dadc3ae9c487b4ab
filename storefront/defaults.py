"""
Storefront Default Values
All hardcoded values should be defined here and accessed via Config.get()
This file contains sensible defaults that can be overridden in .env or config modules
"""

# ============================================================================
# NETWORK DEFAULTS
# ============================================================================

DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 8000

# ============================================================================
# DATABASE DEFAULTS
# ============================================================================

DEFAULT_DATABASE_URL = 'sqlite://storage/database/storefront.sqlite3'

# ============================================================================
# SESSION DEFAULTS
# ============================================================================

DEFAULT_SESSION_DRIVER = 'database'
DEFAULT_SESSION_LIFETIME = 7 * 24 * 3600  # seconds (1 week)
DEFAULT_SESSION_COOKIE_NAME = 'sessionId'
DEFAULT_SESSION_ID_LENGTH = 32
DEFAULT_SESSION_LOTTERY = [2, 100]  # [chances, out_of] for garbage collection

# Readiness verification (slow durable stores need larger values)
# Worst case wait: initial_delay * (2 ** max_attempts - 1) ~= 51 seconds
DEFAULT_SESSION_VERIFY_MAX_ATTEMPTS = 10
DEFAULT_SESSION_VERIFY_INITIAL_DELAY = 0.1  # seconds

# ============================================================================
# SECURITY DEFAULTS
# ============================================================================

# CSRF
DEFAULT_CSRF_HEADER_NAME = 'X-CSRF-Token'
DEFAULT_CSRF_COOKIE_NAME = 'csrf-token'
DEFAULT_CSRF_EXEMPT_PATHS = ['/api/auth/login']
DEFAULT_CSRF_PROTECTED_METHODS = ['POST', 'PUT', 'PATCH', 'DELETE']

# CORS
DEFAULT_CORS_MAX_AGE = 86400  # seconds (for CORS preflight cache)
DEFAULT_CORS_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'PATCH', 'OPTIONS']
DEFAULT_CORS_HEADERS = ['content-type', 'authorization', 'x-csrf-token']
DEFAULT_CORS_PREFLIGHT_STATUS = 200

# Password hashing
DEFAULT_BCRYPT_ROUNDS = 12

# ============================================================================
# REQUEST LOGGING DEFAULTS
# ============================================================================

DEFAULT_REQUEST_ID_LENGTH = 10

# ============================================================================
# UPLOAD DEFAULTS
# ============================================================================

DEFAULT_UPLOAD_ALLOWED_EXTENSIONS = ['.jpg', '.jpeg', '.png', '.webp']
DEFAULT_UPLOAD_ALLOWED_MIME_TYPES = ['image/jpeg', 'image/png', 'image/webp']
DEFAULT_PRODUCT_IMAGE_MAX_SIZE = 5 * 1024 * 1024  # 5MB
DEFAULT_PRODUCT_IMAGE_MAX_FILES = 10
DEFAULT_CHAT_ATTACHMENT_MAX_SIZE = 10 * 1024 * 1024  # 10MB
DEFAULT_CHAT_ATTACHMENT_MAX_FILES = 7

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5
