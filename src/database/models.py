"""
Ludo - Database Models

Pydantic models that mirror the Supabase `profiles` table.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

PLAYER_NAME_PATTERN = r"^[a-zA-Z0-9 ]+$"


class UserStatistics(BaseModel):
    """Win/loss counters kept per profile."""

    games_played: int = Field(default=0, ge=0)
    games_won: int = Field(default=0, ge=0)
    games_lost: int = Field(default=0, ge=0)
    games_abandoned: int = Field(default=0, ge=0)


class ProfileUpdate(BaseModel):
    """Fields a player may change on their profile."""

    player_name: str = Field(min_length=1, max_length=20, pattern=PLAYER_NAME_PATTERN)


class Profile(BaseModel):
    """Mirrors the `profiles` table."""

    id: UUID
    player_name: str = Field(
        default="Player", min_length=1, max_length=20, pattern=PLAYER_NAME_PATTERN
    )
    statistics: UserStatistics = Field(default_factory=UserStatistics)
    created_at: datetime
    updated_at: datetime
    version: int = Field(default=1, gt=0)

    model_config = {"from_attributes": True}


def win_rate(profile: Profile) -> int:
    """Percentage of decided games won, rounded; 0 when none are decided."""
    stats = profile.statistics
    decided = stats.games_won + stats.games_lost
    if decided == 0:
        return 0
    return round(stats.games_won / decided * 100)
