from .base import Base
from .user import UserModel
from .course import CourseModel
from .enrollment import EnrollmentModel
from .chat_session import ChatSessionModel
from .code_snippet import CodeSnippetModel

__all__ = [
    "Base",
    "UserModel",
    "CourseModel",
    "EnrollmentModel",
    "ChatSessionModel",
    "CodeSnippetModel",
]
