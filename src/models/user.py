"""User database model.

This module defines the User database model using SQLAlchemy.
"""

from datetime import datetime

import pytz
from sqlalchemy import Column, DateTime, Integer, JSON, String

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(pytz.utc)


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    user_id = Column(String, primary_key=True, index=True)  # identity provider subject
    email = Column(String, unique=True, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)
    xp = Column(Integer, nullable=False, default=0, index=True)
    rank = Column(Integer, nullable=True)  # cached projection, see UserManager
    badges = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )
