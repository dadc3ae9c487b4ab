from storefront.auth.models.user import User

__all__ = ['User']
