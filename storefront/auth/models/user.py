"""
User Model
Storefront account with email/password authentication and roles
"""
from tortoise import fields
from storefront.database.model import Model


class User(Model):
    """User with email/password authentication and a list of role names"""

    hidden = ['password_hash']

    id = fields.IntField(pk=True)
    email = fields.CharField(max_length=255, unique=True, index=True)
    password_hash = fields.CharField(max_length=255)
    roles = fields.JSONField(default=list)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "users"

    def __str__(self):
        return self.email

    @classmethod
    async def find_by_email(cls, email: str):
        """
        Find user by email

        Returns:
            User instance or None
        """
        return await cls.filter(email=email).first()
