"""SQLAlchemy ORM models for the key-value snapshot store"""

from sqlalchemy import Column, DateTime, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class StoreEntry(Base):
    """One JSON-serialized value stored under a string key"""

    __tablename__ = "kv_store_entry"

    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
