"""
Ludo - Turn Manager

Tracks whose turn it is, consecutive sixes, extra-turn grants and rotation
among the active players.

Game Rules:
- Rolling a 6 earns another roll
- The third 6 in a row forfeits the turn: no move and no extra roll
- Rotation follows the fixed colour order, skipping absent players
- The turn number increases each time rotation wraps to the first player
  in colour order

All methods are stateless class methods operating on TurnState.
"""

import logging
from dataclasses import replace
from typing import Sequence

from src.engine.base import PlayerColor, TurnState
from src.engine.dice import DiceEngine

logger = logging.getLogger(__name__)


class TurnManager:
    """Stateless engine for turn rotation."""

    @classmethod
    def initialize(cls, starting_player: PlayerColor) -> TurnState:
        """Turn state for a new game."""
        return TurnState(current_player=starting_player)

    @classmethod
    def process_roll(cls, state: TurnState, roll: int) -> TurnState:
        """
        Update the turn state after a roll.

        Args:
            state: Current turn state
            roll: Dice value

        Returns:
            New turn state. On the third consecutive six both the counter
            and the extra-turn flag are cleared.
        """
        rolled_six = DiceEngine.grants_extra_turn(roll)
        sixes = state.consecutive_sixes + 1 if rolled_six else 0

        if DiceEngine.ends_turn_after_sixes(sixes):
            logger.debug(
                "%s rolled %d sixes in a row, turn forfeited",
                state.current_player.value, sixes,
            )
            return replace(state, consecutive_sixes=0, has_extra_turn=False)

        return replace(state, consecutive_sixes=sixes, has_extra_turn=rolled_six)

    @classmethod
    def can_roll(cls, state: TurnState) -> bool:
        """False only while the six-count sits at the forced-end threshold."""
        return not DiceEngine.ends_turn_after_sixes(state.consecutive_sixes)

    @classmethod
    def _rotation(cls, active_players: Sequence[PlayerColor]) -> list[PlayerColor]:
        """Active players in the fixed cyclic colour order."""
        if not active_players:
            raise ValueError("At least one active player is required.")
        return [p for p in PlayerColor if p in active_players]

    @classmethod
    def get_next_player(
        cls,
        current: PlayerColor,
        active_players: Sequence[PlayerColor],
    ) -> PlayerColor:
        """
        Preview the next player without changing any state.

        A current player who has left the active list (e.g. after winning)
        is followed by the next active colour after them.
        """
        rotation = cls._rotation(active_players)
        for offset in range(1, len(PlayerColor) + 1):
            candidate = list(PlayerColor)[(current.index + offset) % len(PlayerColor)]
            if candidate in rotation:
                return candidate
        return rotation[0]

    @classmethod
    def advance_to_next(
        cls,
        state: TurnState,
        active_players: Sequence[PlayerColor],
    ) -> TurnState:
        """Pass the turn to the next active player."""
        next_player = cls.get_next_player(state.current_player, active_players)
        wrapped = next_player == cls._rotation(active_players)[0]
        turn_number = state.turn_number + 1 if wrapped else state.turn_number

        logger.debug(
            "Turn passes %s -> %s (round %d)",
            state.current_player.value, next_player.value, turn_number,
        )
        return TurnState(
            current_player=next_player,
            consecutive_sixes=0,
            has_extra_turn=False,
            turn_number=turn_number,
        )

    @classmethod
    def end_turn(
        cls,
        state: TurnState,
        active_players: Sequence[PlayerColor],
    ) -> TurnState:
        """Keep the player on an extra turn, otherwise rotate."""
        if state.has_extra_turn:
            return replace(state, has_extra_turn=False)
        return cls.advance_to_next(state, active_players)
