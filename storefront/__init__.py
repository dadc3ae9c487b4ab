"""
Storefront Package
Export commonly used helpers for easy import
"""

__version__ = '1.0.0'

from storefront.helpers import app_secret

__all__ = [
    'app_secret',
]
