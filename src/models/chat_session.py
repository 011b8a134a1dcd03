import uuid
from datetime import datetime

import pytz
from sqlalchemy import Column, DateTime, ForeignKey, JSON, String, UniqueConstraint

from .base import Base


class ChatSessionModel(Base):
    __tablename__ = "ai_chats"
    __table_args__ = (
        UniqueConstraint("user_id", "session_id", name="uq_ai_chats_user_session"),
    )

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String, ForeignKey("users.user_id", ondelete="CASCADE"), index=True, nullable=False
    )
    session_id = Column(String, index=True, nullable=False)
    messages = Column(JSON, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(pytz.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(pytz.utc),
        onupdate=lambda: datetime.now(pytz.utc),
    )
