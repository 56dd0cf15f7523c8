"""Per-user snapshot of the most recently fetched SoundCloud feed (one row per user)."""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base


class CachedFeed(Base):
    __tablename__ = "cached_feeds"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # unique: at most one cached feed per user; racing inserts fail here instead of duplicating
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    tracks = Column(Text, nullable=False)  # JSON array of track objects
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="cached_feed")
