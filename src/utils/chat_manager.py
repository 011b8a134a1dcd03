"""Chat transcript persistence.

This module stores AI assistant conversations keyed by (user, session id).
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DBSession

from models.chat_session import ChatSessionModel
from schemas.chat import ChatMessage, ChatTranscript
from utils.converters import messages_to_json, model_to_transcript

logger = logging.getLogger(__name__)


class ChatManager:
    """Manages chat transcripts using SQLAlchemy."""

    def __init__(self, db: DBSession):
        """Initialize ChatManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def _find(self, user_id: str, session_id: str) -> Optional[ChatSessionModel]:
        return (
            self.db.query(ChatSessionModel)
            .filter(
                ChatSessionModel.user_id == user_id,
                ChatSessionModel.session_id == session_id,
            )
            .first()
        )

    def get_transcript(self, user_id: str, session_id: str) -> ChatTranscript:
        """Read a transcript.

        Returns:
            The stored transcript, or an empty one if the session is unknown.
        """
        model = self._find(user_id, session_id)
        if not model:
            return ChatTranscript(session_id=session_id, messages=[])
        return model_to_transcript(model)

    def save_transcript(
        self, user_id: str, session_id: str, messages: List[ChatMessage]
    ) -> ChatTranscript:
        """Create or replace the transcript of a session.

        Args:
            user_id: Owner of the conversation.
            session_id: Client-chosen session identifier.
            messages: Full ordered history, including the latest model turn.

        Returns:
            The saved transcript.
        """
        payload = messages_to_json(messages)
        model = self._find(user_id, session_id)
        if model:
            model.messages = payload
            self.db.commit()
        else:
            model = ChatSessionModel(
                user_id=user_id, session_id=session_id, messages=payload
            )
            self.db.add(model)
            try:
                self.db.commit()
            except IntegrityError:
                # Another request created the session first; last write wins.
                self.db.rollback()
                model = self._find(user_id, session_id)
                if model is None:
                    raise
                model.messages = payload
                self.db.commit()
        self.db.refresh(model)
        logger.debug("Saved chat %s for %s (%d messages)", session_id, user_id, len(payload))
        return model_to_transcript(model)
