"""
Session Model
Durable session table used by the database session driver
"""
from tortoise import fields
from storefront.database.model import Model


class SessionRecordModel(Model):
    """One row per session, keyed by session id"""

    sid = fields.CharField(max_length=255, pk=True)
    sess = fields.JSONField(default=dict)
    expire_at = fields.FloatField(index=True)
    updated_at = fields.FloatField()

    class Meta:
        table = "sessions"

    def __str__(self):
        return self.sid
