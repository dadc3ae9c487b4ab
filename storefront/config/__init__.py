"""
Default configuration modules read by storefront.support.Config
"""
