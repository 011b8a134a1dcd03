import uuid
from datetime import datetime

import pytz
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text

from .base import Base


class CodeSnippetModel(Base):
    __tablename__ = "code_snippets"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String, ForeignKey("users.user_id", ondelete="CASCADE"), index=True, nullable=False
    )
    title = Column(Text, nullable=False)
    code = Column(Text, nullable=False)
    language = Column(String, nullable=False)
    ai_assisted = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(pytz.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(pytz.utc),
        onupdate=lambda: datetime.now(pytz.utc),
    )
