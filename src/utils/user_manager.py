"""User management utilities.

This module provides user storage, first-login provisioning from identity
provider claims, XP awards and leaderboard rank maintenance.
"""

import logging
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import InvalidXPAmountError, UserNotFoundError
from models.user import UserModel
from schemas.user import User, UserClaims
from utils.converters import model_to_user

logger = logging.getLogger(__name__)

# Profile fields refreshed from identity claims on every login
_CLAIM_FIELDS = ("email", "first_name", "last_name", "profile_image_url")

# Global standing: XP descending, ties broken by insertion order
_STANDING_ORDER = (
    UserModel.xp.desc(),
    UserModel.created_at.asc(),
    UserModel.user_id.asc(),
)


def validate_xp_amount(amount: object) -> int:
    """Return amount if it is a positive integer.

    Raises:
        InvalidXPAmountError: For zero, negative or non-integer amounts.
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidXPAmountError(amount)
    return amount


class UserManager:
    """Manages user data persistence and gamification state using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def _find(self, user_id: str) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.user_id == user_id).first()

    def get_user(self, user_id: str) -> User:
        """Get a user by user ID.

        Args:
            user_id: User ID to look up.

        Returns:
            User object.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        model = self._find(user_id)
        if not model:
            raise UserNotFoundError(user_id)
        return model_to_user(model)

    def get_or_create_user(self, claims: UserClaims) -> User:
        """Return the user for verified identity claims, creating it on first sight.

        Profile fields present in the claims overwrite the stored ones, so
        the record follows the identity provider.

        Args:
            claims: Claims decoded from the bearer token.

        Returns:
            The stored User.
        """
        model = self._find(claims.sub)
        if model:
            changed = False
            for field in _CLAIM_FIELDS:
                value = getattr(claims, field)
                if value is not None and getattr(model, field) != value:
                    setattr(model, field, value)
                    changed = True
            if changed:
                try:
                    self.db.commit()
                except IntegrityError:
                    self.db.rollback()
                    logger.warning(
                        "Could not refresh profile of %s from claims (email taken)",
                        claims.sub,
                    )
                model = self._find(claims.sub)
            return model_to_user(model)

        model = UserModel(
            user_id=claims.sub,
            email=claims.email,
            first_name=claims.first_name,
            last_name=claims.last_name,
            profile_image_url=claims.profile_image_url,
            xp=0,
            badges=[],
        )
        self.db.add(model)
        # Two first requests from the same subject can race; the primary key
        # lets exactly one of them insert.
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self._find(claims.sub)
            if existing is None:
                raise
            return model_to_user(existing)

        logger.info("Provisioned user: %s", claims.sub)
        self._recompute_ranks_best_effort()
        return self.get_user(claims.sub)

    def award_xp(self, user_id: str, delta: int) -> User:
        """Add XP to a user and refresh leaderboard ranks.

        The increment is a single additive UPDATE, so concurrent awards for
        the same user are never lost. It commits before the re-rank pass;
        a failing re-rank is logged and does not undo the award.

        Args:
            user_id: User to credit.
            delta: Positive number of points.

        Returns:
            The user with the new XP total and recomputed rank.

        Raises:
            InvalidXPAmountError: If delta is not a positive integer.
            UserNotFoundError: If no user matches user_id.
        """
        validate_xp_amount(delta)

        updated = (
            self.db.query(UserModel)
            .filter(UserModel.user_id == user_id)
            .update(
                {
                    UserModel.xp: UserModel.xp + delta,
                    UserModel.updated_at: datetime.now(pytz.utc),
                },
                synchronize_session=False,
            )
        )
        if updated == 0:
            self.db.rollback()
            raise UserNotFoundError(user_id)
        self.db.commit()
        logger.info("Awarded %d XP to %s", delta, user_id)

        self._recompute_ranks_best_effort()
        return self.get_user(user_id)

    def recompute_ranks(self) -> int:
        """Assign 1-based ranks to every user by global standing.

        Only rows whose rank actually moved are written, in one batched
        UPDATE.

        Returns:
            Number of users whose rank changed.
        """
        standings = (
            self.db.query(UserModel.user_id, UserModel.rank)
            .order_by(*_STANDING_ORDER)
            .all()
        )
        changes = [
            {"user_id": user_id, "rank": position}
            for position, (user_id, rank) in enumerate(standings, start=1)
            if rank != position
        ]
        if changes:
            self.db.execute(update(UserModel), changes)
            self.db.commit()
        logger.debug("Recomputed ranks: %d of %d changed", len(changes), len(standings))
        return len(changes)

    def _recompute_ranks_best_effort(self) -> None:
        try:
            self.recompute_ranks()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Rank recompute failed; ranks stay stale until the next pass")

    def get_leaderboard(self, limit: int) -> List[User]:
        """Return the top users by XP.

        Args:
            limit: Maximum number of users to return.

        Returns:
            Users ordered by XP descending, same tie-break as the ranks.
        """
        models = self.db.query(UserModel).order_by(*_STANDING_ORDER).limit(limit).all()
        return [model_to_user(m) for m in models]
