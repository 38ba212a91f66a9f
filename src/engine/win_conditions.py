"""
Ludo - Win Conditions

Aggregates token state into per-player standings and detects game over.
Rankings are derived, never stored: call compute_win_state after every move.
"""

from typing import Sequence

from src.engine.base import (
    FINISH_DISTANCE,
    TOKENS_PER_PLAYER,
    GameWinState,
    PlayerColor,
    PlayerResult,
    Token,
    TokenStatus,
)
from src.engine.tokens import TokenEngine


class WinConditions:
    """Stateless win and ranking detection."""

    @classmethod
    def has_won(cls, player_tokens: Sequence[Token]) -> bool:
        """True iff all of a player's tokens are finished."""
        return TokenEngine.count_finished(player_tokens) == TOKENS_PER_PLAYER

    @classmethod
    def compute_result(cls, player: PlayerColor, all_tokens: Sequence[Token]) -> PlayerResult:
        """Standing for one player; rank is left for the aggregator."""
        player_tokens = TokenEngine.tokens_for_player(all_tokens, player)
        finished = TokenEngine.count_finished(player_tokens)
        return PlayerResult(
            player=player,
            finished_count=finished,
            has_won=finished == TOKENS_PER_PLAYER,
        )

    @classmethod
    def compute_win_state(
        cls,
        all_tokens: Sequence[Token],
        active_players: Sequence[PlayerColor],
    ) -> GameWinState:
        """
        Rank every active player by finished tokens.

        Players with equal finished counts share a rank equal to the
        1-based index of the first entry in their tie group, so two players
        tied for first are both rank 1 and the next group is rank 3.

        Args:
            all_tokens: Every token in the game
            active_players: Players taking part, in turn order

        Returns:
            GameWinState with rankings, winner and game-over flag
        """
        results = [cls.compute_result(player, all_tokens) for player in active_players]
        ordered = sorted(results, key=lambda r: r.finished_count, reverse=True)

        rankings: list[PlayerResult] = []
        rank = 1
        for i, result in enumerate(ordered):
            if i > 0 and result.finished_count < ordered[i - 1].finished_count:
                rank = i + 1
            rankings.append(
                PlayerResult(
                    player=result.player,
                    finished_count=result.finished_count,
                    has_won=result.has_won,
                    rank=rank,
                )
            )

        winner = next((r.player for r in rankings if r.has_won), None)
        return GameWinState(
            is_game_over=winner is not None,
            winner=winner,
            rankings=tuple(rankings),
        )

    @classmethod
    def should_continue(
        cls,
        win_state: GameWinState,
        continue_after_winner: bool = True,
    ) -> bool:
        """
        Decide whether play goes on.

        Before a winner exists the game always continues. Afterwards it
        continues only when enabled and more than one player is still
        competing for the remaining placements.
        """
        if win_state.winner is None:
            return True
        if not continue_after_winner:
            return False
        still_playing = sum(1 for r in win_state.rankings if not r.has_won)
        return still_playing > 1

    @classmethod
    def get_winners_in_order(cls, win_state: GameWinState) -> tuple[PlayerColor, ...]:
        """Players sorted by assigned rank, best first."""
        return tuple(r.player for r in sorted(win_state.rankings, key=lambda r: r.rank))

    @classmethod
    def can_win_this_turn(cls, player_tokens: Sequence[Token], roll: int) -> bool:
        """True iff this roll finishes the player's last remaining token."""
        if TokenEngine.count_finished(player_tokens) != TOKENS_PER_PLAYER - 1:
            return False

        last = next((t for t in player_tokens if t.status == TokenStatus.ACTIVE), None)
        if last is None:
            return False

        return FINISH_DISTANCE - last.distance_traveled == roll
