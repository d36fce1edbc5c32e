"""
SQLAlchemy ORM Models for the key-value store

A single table holds one JSON document per storage key
(e.g. the per-user progress record or a saved session).
"""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class KeyValueRecord(Base):
    """
    One stored value, addressed by its (user-namespaced) key.
    """
    __tablename__ = 'kv_store'

    key = Column(String(255), primary_key=True, nullable=False)
    value = Column(Text, nullable=False)  # JSON document
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<KeyValueRecord({self.key}, {len(self.value or '')} chars)>"
