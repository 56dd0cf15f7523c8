"""
Application user. Only the columns the feed cache needs as a foreign-key target;
sign-up, login and admin CRUD live outside this backend.
"""
import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func

from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=False, unique=True, index=True)
    first_name = Column(String(128), nullable=True)
    last_name = Column(String(128), nullable=True)
    role = Column(String(32), nullable=False, default="user", server_default="user")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    cached_feed = relationship(
        "CachedFeed",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @validates("email")
    def _lower_email(self, key, value):
        return (value or "").strip().lower()
