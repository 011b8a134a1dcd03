"""Course catalog and enrollment routes.

This module handles HTTP endpoints for listing, reading and creating courses
and for enrolling the current user.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import get_current_user
from config import ENROLLMENT_XP_BONUS, SEED_COURSE_CATALOG
from core.dependencies import AIProxyDep, CourseManagerDep, UserManagerDep
from core.exceptions import CourseNotFoundError
from schemas.course import Course, CreateCourseRequest, Enrollment
from schemas.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/courses", tags=["Courses"])


@router.get("", response_model=List[Course], summary="List catalog courses")
def list_courses(
    course_manager: CourseManagerDep,
    category: Optional[str] = None,
) -> List[Course]:
    """List courses, optionally filtered by category.

    An empty catalog is populated with the starter courses on first read.

    Args:
        course_manager: Injected CourseManager instance.
        category: Optional category filter ("all" means no filter).

    Returns:
        List of Course objects, newest first.
    """
    if SEED_COURSE_CATALOG and course_manager.count_courses() == 0:
        course_manager.seed_catalog()
    return course_manager.list_courses(category)


@router.get("/{course_id}", response_model=Course, summary="Get one course")
def get_course(course_id: str, course_manager: CourseManagerDep) -> Course:
    """Get a course by ID.

    Raises:
        HTTPException: 404 if course not found.
    """
    try:
        return course_manager.get_course(course_id)
    except CourseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=Course, summary="Create a course")
def create_course(
    req: CreateCourseRequest,
    course_manager: CourseManagerDep,
    ai_proxy: AIProxyDep,
    current_user: User = Depends(get_current_user),
) -> Course:
    """Create a catalog entry.

    With generate_ai set, the description, duration and (if missing)
    thumbnail come from the AI assistant and the course is flagged as
    AI-generated.

    Args:
        req: CreateCourseRequest body.
        course_manager: Injected CourseManager instance.
        ai_proxy: Injected AIProxyService instance.
        current_user: Current authenticated user.

    Returns:
        The created Course.

    Raises:
        HTTPException: 400 if description or duration are missing without
            generate_ai.
    """
    data = req.model_dump(exclude={"generate_ai"})
    if req.generate_ai:
        content = ai_proxy.generate_course_content(req.title, req.level, req.category)
        data["description"] = content.description
        data["duration"] = content.duration
        data["ai_generated"] = True
        if not data.get("thumbnail_url"):
            data["thumbnail_url"] = ai_proxy.course_thumbnail(req.category)
    elif not req.description or not req.duration:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="description and duration are required unless generate_ai is set.",
        )

    course = course_manager.create_course(**data)
    logger.info("User %s created course %s", current_user.user_id, course.id)
    return course


@router.post(
    "/{course_id}/enroll", response_model=Enrollment, summary="Enroll in a course"
)
def enroll(
    course_id: str,
    course_manager: CourseManagerDep,
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> Enrollment:
    """Enroll the current user. Repeating the call returns the same record.

    The enrollment XP bonus is granted only for a first-time enrollment.

    Raises:
        HTTPException: 404 if course not found.
    """
    try:
        enrollment, created = course_manager.enroll(current_user.user_id, course_id)
    except CourseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    if created and ENROLLMENT_XP_BONUS > 0:
        user_manager.award_xp(current_user.user_id, ENROLLMENT_XP_BONUS)
    return enrollment
