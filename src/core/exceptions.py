"""Custom exception classes for the CodeQuest API.

This module defines application-specific exceptions following Google Python
Style Guide. Route handlers translate them into HTTP error responses.
"""


class CodeQuestError(Exception):
    """Base exception for all CodeQuest errors."""

    pass


class NotFoundError(CodeQuestError):
    """Raised when a referenced entity does not exist."""

    pass


class UserNotFoundError(NotFoundError):
    """Raised when a requested user cannot be found."""

    def __init__(self, user_id: str):
        """Initialize the exception.

        Args:
            user_id: The ID of the user that was not found.
        """
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found")


class CourseNotFoundError(NotFoundError):
    """Raised when a requested course cannot be found."""

    def __init__(self, course_id: str):
        """Initialize the exception.

        Args:
            course_id: The ID of the course that was not found.
        """
        self.course_id = course_id
        super().__init__(f"Course '{course_id}' not found")


class SnippetNotFoundError(NotFoundError):
    """Raised when a requested code snippet cannot be found."""

    def __init__(self, snippet_id: str):
        self.snippet_id = snippet_id
        super().__init__(f"Code snippet '{snippet_id}' not found")


class ValidationError(CodeQuestError):
    """Raised when data validation fails."""

    pass


class InvalidXPAmountError(ValidationError):
    """Raised when an XP award is not a positive integer."""

    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(f"Invalid XP amount: {amount}. Must be a positive integer.")


class ConfigurationError(CodeQuestError):
    """Raised when there is a configuration error."""

    pass


class UpstreamError(CodeQuestError):
    """Raised when the hosted AI provider fails or returns garbage."""

    pass
