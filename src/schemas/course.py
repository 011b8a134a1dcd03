"""Course and enrollment schema definitions."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

CourseLevel = Literal["beginner", "intermediate", "advanced"]


class Course(BaseModel):
    """A catalog entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    level: str
    duration: str
    category: str
    thumbnail_url: Optional[str] = None
    youtube_video_id: Optional[str] = None
    youtube_channel_name: Optional[str] = None
    youtube_video_url: Optional[str] = None
    enrolled: int = Field(default=0, description="Number of distinct enrolled users.")
    ai_generated: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateCourseRequest(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    level: CourseLevel
    duration: Optional[str] = None
    category: str = Field(min_length=1)
    thumbnail_url: Optional[str] = None
    youtube_video_id: Optional[str] = None
    youtube_channel_name: Optional[str] = None
    youtube_video_url: Optional[str] = None
    generate_ai: bool = Field(
        default=False,
        description="Fill description, duration and thumbnail using the AI assistant.",
    )


class Enrollment(BaseModel):
    """A user's membership in a course."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    course_id: str
    progress: int = Field(default=0, ge=0, le=100, description="Completion percentage.")
    completed: bool = False
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class EnrollmentWithCourse(Enrollment):
    course: Course
