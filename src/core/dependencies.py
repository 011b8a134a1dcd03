"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes,
following Google Python Style Guide and FastAPI best practices.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_db
from utils import ai_proxy
from utils import chat_manager
from utils import course_manager
from utils import snippet_manager
from utils import user_manager


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_course_manager(db: Session = Depends(get_db)) -> course_manager.CourseManager:
    """Get CourseManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        CourseManager instance.
    """
    return course_manager.CourseManager(db)


def get_chat_manager(db: Session = Depends(get_db)) -> chat_manager.ChatManager:
    """Get ChatManager instance with request-scoped DB session."""
    return chat_manager.ChatManager(db)


def get_snippet_manager(db: Session = Depends(get_db)) -> snippet_manager.SnippetManager:
    """Get SnippetManager instance with request-scoped DB session."""
    return snippet_manager.SnippetManager(db)


def get_ai_proxy() -> ai_proxy.AIProxyService:
    """Get AIProxyService singleton instance.

    Returns:
        AIProxyService instance (singleton, holds the runtime API key).
    """
    return ai_proxy.get_ai_proxy()


# Type aliases for dependency injection
UserManagerDep = Annotated[
    user_manager.UserManager, Depends(get_user_manager)
]
CourseManagerDep = Annotated[
    course_manager.CourseManager, Depends(get_course_manager)
]
ChatManagerDep = Annotated[
    chat_manager.ChatManager, Depends(get_chat_manager)
]
SnippetManagerDep = Annotated[
    snippet_manager.SnippetManager, Depends(get_snippet_manager)
]
AIProxyDep = Annotated[
    ai_proxy.AIProxyService, Depends(get_ai_proxy)
]
