"""
Base Model
Tortoise base model with serialization helpers
"""
from tortoise.models import Model as TortoiseModel
from typing import Optional, List, Dict, Any
from datetime import datetime


class Model(TortoiseModel):
    """
    Base model class

    Subclasses can set `hidden` to keep fields out of to_dict().
    """

    hidden: List[str] = []

    class Meta:
        abstract = True

    @classmethod
    async def find(cls, pk: Any) -> Optional['Model']:
        """
        Find model by primary key

        Example:
            user = await User.find(1)
        """
        return await cls.filter(pk=pk).first()

    def to_dict(self, exclude: Optional[List[str]] = None, include_hidden: bool = False) -> Dict[str, Any]:
        """
        Convert model to dictionary (respects the 'hidden' attribute)

        Example:
            data = user.to_dict()  # Excludes fields in user.hidden
            data = user.to_dict(exclude=['email'])
        """
        exclude = list(exclude or [])

        if not include_hidden:
            exclude.extend(getattr(self.__class__, 'hidden', []))

        data = {}
        for field in self._meta.fields_map.keys():
            if field in exclude:
                continue
            value = getattr(self, field, None)
            if isinstance(value, datetime):
                value = value.isoformat()
            data[field] = value

        return data

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} pk={self.pk}>"
