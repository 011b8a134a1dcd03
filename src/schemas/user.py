"""User schema definitions.

This module defines the User data model and the XP award request/response
bodies.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """A platform user with gamification state."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str = Field(description="Subject identifier issued by the identity provider.")
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    xp: int = Field(default=0, description="Accumulated experience points.")
    rank: Optional[int] = Field(
        default=None,
        description="1-based leaderboard position as of the last rank recompute.",
    )
    badges: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserClaims(BaseModel):
    """Identity claims extracted from a verified bearer token."""

    sub: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class AwardXPRequest(BaseModel):
    amount: int = Field(description="XP to grant. Must be positive.")
    reason: Optional[str] = None


class AwardXPResponse(BaseModel):
    user: User
    awarded: int
    reason: Optional[str] = None
