"""
Cache Models.

SQLAlchemy model backing the local key-value cache.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from notekeeper.core.utils import utc_now


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class CacheEntry(Base):
    """
    One cached value.

    Keys are fixed names (notes, draft, sessionAuthenticated). Values are
    JSON documents, overwritten on every write with no versioning.
    """

    __tablename__ = "cache_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<CacheEntry(key={self.key!r})>"
