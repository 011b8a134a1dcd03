"""Current-user and leaderboard routes."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.routes.auth import get_current_user
from config import DEFAULT_LEADERBOARD_LIMIT, MAX_LEADERBOARD_LIMIT
from core.dependencies import CourseManagerDep, UserManagerDep
from core.exceptions import InvalidXPAmountError, UserNotFoundError
from schemas.course import EnrollmentWithCourse
from schemas.user import AwardXPRequest, AwardXPResponse, User

router = APIRouter(prefix="/api", tags=["Users"])


@router.get(
    "/user/courses",
    response_model=List[EnrollmentWithCourse],
    summary="List the current user's enrollments",
)
def list_user_courses(
    course_manager: CourseManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[EnrollmentWithCourse]:
    return course_manager.list_user_courses(current_user.user_id)


@router.post("/user/award-xp", response_model=AwardXPResponse, summary="Award XP")
def award_xp(
    req: AwardXPRequest,
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> AwardXPResponse:
    """Grant XP to the current user.

    Args:
        req: AwardXPRequest with a positive amount and optional reason.
        user_manager: Injected UserManager instance.
        current_user: Current authenticated user.

    Returns:
        The updated user, the amount awarded and the reason.

    Raises:
        HTTPException: 400 for a non-positive amount.
    """
    try:
        user = user_manager.award_xp(current_user.user_id, req.amount)
    except InvalidXPAmountError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid XP amount",
        )
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return AwardXPResponse(user=user, awarded=req.amount, reason=req.reason)


@router.get("/leaderboard", response_model=List[User], summary="Top users by XP")
def get_leaderboard(
    user_manager: UserManagerDep,
    limit: int = Query(DEFAULT_LEADERBOARD_LIMIT, ge=1, le=MAX_LEADERBOARD_LIMIT),
) -> List[User]:
    return user_manager.get_leaderboard(limit)
