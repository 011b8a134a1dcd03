import uuid
from datetime import datetime

import pytz
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import Base


class CourseModel(Base):
    __tablename__ = "courses"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    level = Column(String, nullable=False)  # beginner, intermediate, advanced
    duration = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    thumbnail_url = Column(Text, nullable=True)
    youtube_video_id = Column(String, nullable=True)
    youtube_channel_name = Column(String, nullable=True)
    youtube_video_url = Column(Text, nullable=True)
    enrolled = Column(Integer, nullable=False, default=0)
    ai_generated = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(pytz.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(pytz.utc),
        onupdate=lambda: datetime.now(pytz.utc),
    )

    enrollments = relationship(
        "EnrollmentModel",
        back_populates="course",
        cascade="all, delete-orphan",
    )
