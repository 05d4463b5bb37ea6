"""Data models."""
from bmi_bot.models.base import BaseModel, TimestampMixin
from bmi_bot.models.storage_entry import StorageEntry
from bmi_bot.models.record import Record, Gender, Classification

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "StorageEntry",
    "Record",
    "Gender",
    "Classification",
]
