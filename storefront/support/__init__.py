"""
Storefront Support Classes
"""

from storefront.support.storage import Storage
from storefront.support.env_helper import EnvHelper
from storefront.support.config import Config
from storefront.support.crypto import Crypto

__all__ = [
    'Storage',
    'EnvHelper',
    'Config',
    'Crypto',
]
