"""Code snippet persistence for the in-browser editor."""

import logging
from typing import List

from sqlalchemy.orm import Session

from core.exceptions import SnippetNotFoundError
from models.code_snippet import CodeSnippetModel
from schemas.code_snippet import CodeSnippet
from utils.converters import model_to_snippet

logger = logging.getLogger(__name__)


class SnippetManager:
    """Manages user-owned code snippets."""

    def __init__(self, db: Session):
        self.db = db

    def create_snippet(
        self,
        user_id: str,
        title: str,
        code: str,
        language: str,
        ai_assisted: bool = False,
    ) -> CodeSnippet:
        model = CodeSnippetModel(
            user_id=user_id,
            title=title,
            code=code,
            language=language,
            ai_assisted=ai_assisted,
        )
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Saved %s snippet %s for %s", language, model.id, user_id)
        return model_to_snippet(model)

    def list_snippets(self, user_id: str) -> List[CodeSnippet]:
        models = (
            self.db.query(CodeSnippetModel)
            .filter(CodeSnippetModel.user_id == user_id)
            .order_by(CodeSnippetModel.created_at.desc())
            .all()
        )
        return [model_to_snippet(m) for m in models]

    def get_snippet(self, snippet_id: str, owner_id: str) -> CodeSnippet:
        """Get a snippet owned by owner_id.

        Raises:
            SnippetNotFoundError: If absent or owned by someone else.
        """
        model = (
            self.db.query(CodeSnippetModel)
            .filter(
                CodeSnippetModel.id == snippet_id,
                CodeSnippetModel.user_id == owner_id,
            )
            .first()
        )
        if not model:
            raise SnippetNotFoundError(snippet_id)
        return model_to_snippet(model)
