"""Key/value row of the persistent storage."""
from sqlalchemy import Column, String, Text
from bmi_bot.models.base import BaseModel


class StorageEntry(BaseModel):
    """One key/value slot.

    The whole record collection lives in a single row as a JSON array,
    see RecordStore.
    """

    __tablename__ = "storage"

    key = Column(String(100), unique=True, nullable=False, index=True)
    value = Column(Text, nullable=False)

    def __repr__(self):
        return f"<StorageEntry {self.key} ({len(self.value or '')} chars)>"
