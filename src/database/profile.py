"""
Ludo - Profile Manager

CRUD operations for the `profiles` table. Only consumes the final win state
of a finished game; the rules engine never reads or writes persisted data.

Statistics follow one path per game: record_game_started when play begins,
then exactly one of record_game (a winner was decided) or record_abandoned
(the player quit). games_played therefore always covers every won, lost and
abandoned game.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, TypeVar

from httpx import RemoteProtocolError
from supabase import Client

from src.database.client import get_supabase_client
from src.database.models import Profile, ProfileUpdate, UserStatistics
from src.engine.base import GameWinState, PlayerColor

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _db_retry(
    query: Callable[[], T],
    retries: int = 2,
    reset: Callable[[], None] | None = None,
) -> T:
    """
    Run *query* with simple retry on transient connection errors.

    Args:
        query: Builds and executes the request; called again on each attempt
        retries: Extra attempts after the first failure
        reset: Called between attempts to drop a stale connection
    """
    for attempt in range(retries + 1):
        try:
            return query()
        except (RemoteProtocolError, OSError):
            if attempt == retries:
                logger.exception("Database call failed after %d attempts", attempt + 1)
                raise
            if reset is not None:
                reset()
            time.sleep(0.3)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _unsettled_games(stats: UserStatistics) -> int:
    return stats.games_played - stats.games_won - stats.games_lost - stats.games_abandoned


class ProfileManager:
    """
    Manages player profiles and their statistics in Supabase.

    Without an injected client each request goes through the cached
    get_supabase_client(), which is rebuilt after a dropped connection.
    """

    TABLE = "profiles"

    def __init__(self, client: Client | None = None) -> None:
        self._client = client

    @property
    def table(self):
        client = self._client if self._client is not None else get_supabase_client()
        return client.table(self.TABLE)

    def _run(self, query: Callable[[], T]) -> T:
        reset = None if self._client is not None else get_supabase_client.cache_clear
        return _db_retry(query, reset=reset)

    def create(self, player_name: str = "Player") -> Profile:
        """Create a profile with zeroed statistics."""
        ProfileUpdate(player_name=player_name)
        data = self._run(
            lambda: self.table
            .insert({
                "player_name": player_name,
                "statistics": UserStatistics().model_dump(),
            })
            .execute()
        )
        return Profile.model_validate(data.data[0])

    def get(self, profile_id: str) -> Profile | None:
        """Get a single profile by ID."""
        data = self._run(
            lambda: self.table
            .select("*")
            .eq("id", profile_id)
            .execute()
        )
        if data.data:
            return Profile.model_validate(data.data[0])
        return None

    def _save_statistics(self, profile_id: str, stats: UserStatistics) -> Profile:
        data = self._run(
            lambda: self.table
            .update({"statistics": stats.model_dump(), "updated_at": _now()})
            .eq("id", profile_id)
            .execute()
        )
        return Profile.model_validate(data.data[0])

    def _require(self, profile_id: str) -> Profile:
        profile = self.get(profile_id)
        if profile is None:
            raise LookupError(f"Profile {profile_id} does not exist.")
        return profile

    def _settle(self, profile_id: str, outcome: str) -> Profile:
        """Add one to an outcome counter for a game already counted as played."""
        stats = self._require(profile_id).statistics
        if _unsettled_games(stats) < 1:
            raise ValueError(
                f"Profile {profile_id} has no started game to settle; "
                "call record_game_started first."
            )
        stats = stats.model_copy(update={outcome: getattr(stats, outcome) + 1})
        return self._save_statistics(profile_id, stats)

    def record_game_started(self, profile_id: str) -> Profile:
        """Count a new game as played, before its outcome is known."""
        stats = self._require(profile_id).statistics
        stats = stats.model_copy(update={"games_played": stats.games_played + 1})
        logger.debug("Game started for profile %s", profile_id)
        return self._save_statistics(profile_id, stats)

    def record_abandoned(self, profile_id: str) -> Profile:
        """Settle the started game as quit before completion."""
        logger.info("Recording abandoned game for profile %s", profile_id)
        return self._settle(profile_id, "games_abandoned")

    def reset_statistics(self, profile_id: str) -> Profile:
        """Zero every counter, keeping name and ID."""
        self._require(profile_id)
        return self._save_statistics(profile_id, UserStatistics())

    def update_player_name(self, profile_id: str, player_name: str) -> Profile:
        """Rename the player (1-20 letters, digits or spaces)."""
        ProfileUpdate(player_name=player_name)
        self._require(profile_id)
        data = self._run(
            lambda: self.table
            .update({"player_name": player_name, "updated_at": _now()})
            .eq("id", profile_id)
            .execute()
        )
        return Profile.model_validate(data.data[0])

    def record_game(
        self,
        profile_id: str,
        player: PlayerColor,
        win_state: GameWinState,
    ) -> Profile:
        """
        Settle the started game from its final win state.

        Args:
            profile_id: Profile of the local player
            player: Colour the local player used
            win_state: Final win state of the game

        Returns:
            Updated profile

        Raises:
            ValueError: If the game has no winner yet, or no started game
                        is waiting to be settled
        """
        if not win_state.is_game_over:
            raise ValueError("Cannot record a game that has no winner yet.")

        won = win_state.winner == player
        logger.info(
            "Recording %s for profile %s", "win" if won else "loss", profile_id
        )
        return self._settle(profile_id, "games_won" if won else "games_lost")
