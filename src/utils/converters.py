"""Conversion helpers between ORM models and API schemas."""

from typing import Any, Dict, List

from models.chat_session import ChatSessionModel
from models.code_snippet import CodeSnippetModel
from models.course import CourseModel
from models.enrollment import EnrollmentModel
from models.user import UserModel
from schemas.chat import ChatMessage, ChatTranscript
from schemas.code_snippet import CodeSnippet
from schemas.course import Course, Enrollment, EnrollmentWithCourse
from schemas.user import User


def model_to_user(model: UserModel) -> User:
    user = User.model_validate(model)
    # JSON columns may come back as None on rows written outside the ORM
    user.badges = list(model.badges or [])
    return user


def model_to_course(model: CourseModel) -> Course:
    return Course.model_validate(model)


def model_to_enrollment(model: EnrollmentModel) -> Enrollment:
    return Enrollment.model_validate(model)


def model_to_enrollment_with_course(
    enrollment: EnrollmentModel, course: CourseModel
) -> EnrollmentWithCourse:
    data = Enrollment.model_validate(enrollment).model_dump()
    data["course"] = model_to_course(course)
    return EnrollmentWithCourse(**data)


def model_to_snippet(model: CodeSnippetModel) -> CodeSnippet:
    return CodeSnippet.model_validate(model)


def messages_to_json(messages: List[ChatMessage]) -> List[Dict[str, Any]]:
    return [m.model_dump() for m in messages]


def model_to_transcript(model: ChatSessionModel) -> ChatTranscript:
    return ChatTranscript(
        session_id=model.session_id,
        messages=[ChatMessage(**m) for m in (model.messages or [])],
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
