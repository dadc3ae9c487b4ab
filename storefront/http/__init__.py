"""
HTTP helpers
"""
from storefront.http.response_helper import ResponseHelper

__all__ = ['ResponseHelper']
