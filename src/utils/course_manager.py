"""Course catalog and enrollment management.

This module handles course CRUD, the starter catalog and the enrollment
consistency rules: one enrollment row per (user, course) and one counter
increment per distinct enrolling user.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import CourseNotFoundError
from models.course import CourseModel
from models.enrollment import EnrollmentModel
from schemas.course import Course, Enrollment, EnrollmentWithCourse
from utils.converters import (
    model_to_course,
    model_to_enrollment,
    model_to_enrollment_with_course,
)
from utils.course_catalog import STARTER_COURSES

logger = logging.getLogger(__name__)

# Category value the client sends to mean "no filter"
ALL_CATEGORIES = "all"


class CourseManager:
    """Manages courses and enrollments using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize CourseManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def _get_model(self, course_id: str) -> CourseModel:
        model = self.db.query(CourseModel).filter(CourseModel.id == course_id).first()
        if not model:
            raise CourseNotFoundError(course_id)
        return model

    def _find_enrollment(self, user_id: str, course_id: str) -> Optional[EnrollmentModel]:
        return (
            self.db.query(EnrollmentModel)
            .filter(
                EnrollmentModel.user_id == user_id,
                EnrollmentModel.course_id == course_id,
            )
            .first()
        )

    def list_courses(self, category: Optional[str] = None) -> List[Course]:
        """List catalog courses, newest first.

        Args:
            category: Optional category filter. None, empty or "all" disables it.

        Returns:
            List of Course objects.
        """
        query = self.db.query(CourseModel)
        if category and category != ALL_CATEGORIES:
            query = query.filter(CourseModel.category == category)
        models = query.order_by(CourseModel.created_at.desc(), CourseModel.id).all()
        return [model_to_course(m) for m in models]

    def count_courses(self) -> int:
        return self.db.query(CourseModel).count()

    def get_course(self, course_id: str) -> Course:
        """Get a course by ID.

        Raises:
            CourseNotFoundError: If the course does not exist.
        """
        return model_to_course(self._get_model(course_id))

    def create_course(self, **fields: Any) -> Course:
        """Insert a catalog entry.

        Args:
            **fields: Column values for CourseModel.

        Returns:
            The created Course.
        """
        model = CourseModel(**fields)
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created course %s (%s)", model.id, model.title)
        return model_to_course(model)

    def seed_catalog(self, courses: Optional[List[Dict[str, Any]]] = None) -> int:
        """Populate an empty catalog with the starter courses.

        Returns:
            Number of courses inserted (0 when the catalog already has rows).
        """
        if self.count_courses() > 0:
            return 0
        entries = courses if courses is not None else STARTER_COURSES
        self.db.add_all(CourseModel(**entry) for entry in entries)
        self.db.commit()
        logger.info("Seeded %d starter courses", len(entries))
        return len(entries)

    def enroll(self, user_id: str, course_id: str) -> Tuple[Enrollment, bool]:
        """Enroll a user in a course, idempotently.

        The enrollment insert and the counter increment share one
        transaction. A concurrent enroll for the same pair loses on the
        unique constraint and gets the winner's row back.

        Args:
            user_id: Enrolling user.
            course_id: Target course.

        Returns:
            Tuple of (enrollment, created). created is False when the user
            was already enrolled.

        Raises:
            CourseNotFoundError: If the course does not exist.
        """
        self._get_model(course_id)

        existing = self._find_enrollment(user_id, course_id)
        if existing:
            return model_to_enrollment(existing), False

        enrollment = EnrollmentModel(
            user_id=user_id,
            course_id=course_id,
            progress=0,
            completed=False,
        )
        try:
            self.db.add(enrollment)
            self.db.flush()
            self.db.query(CourseModel).filter(CourseModel.id == course_id).update(
                {CourseModel.enrolled: CourseModel.enrolled + 1},
                synchronize_session=False,
            )
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self._find_enrollment(user_id, course_id)
            if existing is None:
                raise
            logger.info(
                "Concurrent enrollment of %s in %s resolved to existing row",
                user_id,
                course_id,
            )
            return model_to_enrollment(existing), False

        self.db.refresh(enrollment)
        logger.info("Enrolled %s in course %s", user_id, course_id)
        return model_to_enrollment(enrollment), True

    def list_user_courses(self, user_id: str) -> List[EnrollmentWithCourse]:
        """List a user's enrollments joined with their courses, most recent first."""
        rows = (
            self.db.query(EnrollmentModel, CourseModel)
            .join(CourseModel, CourseModel.id == EnrollmentModel.course_id)
            .filter(EnrollmentModel.user_id == user_id)
            .order_by(EnrollmentModel.started_at.desc())
            .all()
        )
        return [model_to_enrollment_with_course(e, c) for e, c in rows]
