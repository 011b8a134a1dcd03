import uuid
from datetime import datetime

import pytz
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import Base


class EnrollmentModel(Base):
    __tablename__ = "user_courses"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "course_id",
            name="uq_user_courses_user_course",
        ),
    )

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    course_id = Column(
        String,
        ForeignKey("courses.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    progress = Column(Integer, nullable=False, default=0)  # percentage
    completed = Column(Boolean, nullable=False, default=False)
    started_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(pytz.utc)
    )
    completed_at = Column(DateTime(timezone=True), nullable=True)

    course = relationship("CourseModel", back_populates="enrollments")
