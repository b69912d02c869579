from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime

from .base import Base


class RecordCache(Base):
    """One JSON snapshot per logical key, replaced wholesale on every write."""

    __tablename__ = "record_cache"

    key = Column(String, primary_key=True, index=True)
    payload = Column(Text, nullable=False, default="[]")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
