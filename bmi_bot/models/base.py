"""Base classes for SQLAlchemy models."""
from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.sql import func
from bmi_bot.database import Base


class TimestampMixin:
    """Mixin that adds creation and update timestamps."""

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class BaseModel(Base, TimestampMixin):
    """Base model for all tables."""

    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
