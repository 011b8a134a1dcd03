"""Code snippet routes for the in-browser editor."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import get_current_user
from config import SNIPPET_XP_BONUS
from core.dependencies import SnippetManagerDep, UserManagerDep
from core.exceptions import SnippetNotFoundError
from schemas.code_snippet import CodeSnippet, CreateCodeSnippetRequest
from schemas.user import User

router = APIRouter(prefix="/api/code-snippets", tags=["Code Snippets"])


@router.post("", response_model=CodeSnippet, summary="Save a code snippet")
def create_snippet(
    req: CreateCodeSnippetRequest,
    snippet_manager: SnippetManagerDep,
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> CodeSnippet:
    """Save code for the current user and grant the snippet XP bonus."""
    snippet = snippet_manager.create_snippet(
        user_id=current_user.user_id,
        title=req.title,
        code=req.code,
        language=req.language,
        ai_assisted=req.ai_assisted,
    )
    if SNIPPET_XP_BONUS > 0:
        user_manager.award_xp(current_user.user_id, SNIPPET_XP_BONUS)
    return snippet


@router.get("", response_model=List[CodeSnippet], summary="List my snippets")
def list_snippets(
    snippet_manager: SnippetManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[CodeSnippet]:
    return snippet_manager.list_snippets(current_user.user_id)


@router.get("/{snippet_id}", response_model=CodeSnippet, summary="Get a snippet")
def get_snippet(
    snippet_id: str,
    snippet_manager: SnippetManagerDep,
    current_user: User = Depends(get_current_user),
) -> CodeSnippet:
    """Get one of the current user's snippets.

    Raises:
        HTTPException: 404 if absent or owned by another user.
    """
    try:
        return snippet_manager.get_snippet(snippet_id, owner_id=current_user.user_id)
    except SnippetNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
