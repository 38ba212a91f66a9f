"""
Ludo - Game Session

Immutable record of a game in progress and the stateless engine that moves
it forward. The caller owns the authoritative GameSession; every operation
takes the current session and returns a new one, so what-if previews (AI
look-ahead, UI hints) never leak into the real game.

Timing (AI thinking pauses, capture highlights, auto-advance delays) belongs
to the caller: every transition here is instantaneous.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Sequence

from src.config.settings import get_settings
from src.engine.base import (
    GameConfig,
    GameMode,
    GameWinState,
    InvalidMoveError,
    PlayerColor,
    Token,
    TurnState,
)
from src.engine.dice import DiceEngine
from src.engine.tokens import TokenEngine
from src.engine.turns import TurnManager
from src.engine.validators import (
    validate_active_players,
    validate_roll,
    validate_token_owner,
    validate_token_set,
)
from src.engine.win_conditions import WinConditions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSession:
    """
    Complete state of a game.

    Attributes:
        config: Mode and continuation rule
        tokens: Every token in the game
        turn: Turn state of the acting player
        win_state: Standings derived from tokens after the last move
        last_roll: Most recent dice value (kept for display)
        roll_count: Rolls made so far in the game
        awaiting_move: Whether last_roll still has to be spent on a move
        moveable_token_ids: Tokens the acting player may move with last_roll
        selected_token_id: Token chosen for the pending move
        captured_token_id: Token sent home by the most recent move
        forfeited_turn: Whether the most recent roll was the third six
        is_active: False before start and after game over
        is_paused: Whether input is currently blocked
    """
    config: GameConfig
    tokens: tuple[Token, ...]
    turn: TurnState
    win_state: GameWinState
    last_roll: int | None = None
    roll_count: int = 0
    awaiting_move: bool = False
    moveable_token_ids: tuple[str, ...] = field(default_factory=tuple)
    selected_token_id: str | None = None
    captured_token_id: str | None = None
    forfeited_turn: bool = False
    is_active: bool = True
    is_paused: bool = False

    @property
    def players(self) -> tuple[PlayerColor, ...]:
        return self.config.players

    @property
    def current_player(self) -> PlayerColor:
        return self.turn.current_player

    @property
    def current_player_tokens(self) -> tuple[Token, ...]:
        return TokenEngine.tokens_for_player(self.tokens, self.current_player)

    @property
    def competing_players(self) -> tuple[PlayerColor, ...]:
        """Active players who have not yet finished all tokens."""
        won = {r.player for r in self.win_state.rankings if r.has_won}
        return tuple(p for p in self.players if p not in won)


class SessionEngine:
    """
    Stateless engine driving a GameSession.

    All methods are class methods operating on immutable data.
    State is passed in and returned, never stored.
    """

    @classmethod
    def _resolve_config(cls, config: GameConfig | GameMode) -> GameConfig:
        """A bare mode takes its continuation rule from settings."""
        if isinstance(config, GameMode):
            config = GameConfig(
                mode=config,
                continue_after_winner=get_settings().continue_after_winner,
            )
        validate_active_players(config.players)
        return config

    @classmethod
    def start(cls, config: GameConfig | GameMode) -> GameSession:
        """Set up a new game with every token in home."""
        config = cls._resolve_config(config)
        players = config.players
        tokens = TokenEngine.create_tokens(players)
        logger.info(
            "Starting %s game with %s",
            config.mode.value, ", ".join(p.value for p in players),
        )
        return GameSession(
            config=config,
            tokens=tokens,
            turn=TurnManager.initialize(players[0]),
            win_state=WinConditions.compute_win_state(tokens, players),
        )

    @classmethod
    def load(
        cls,
        config: GameConfig | GameMode,
        tokens: Sequence[Token],
        current_player: PlayerColor,
        turn_number: int = 1,
    ) -> GameSession:
        """
        Rebuild a session from a saved board position.

        Args:
            config: Mode and continuation rule
            tokens: Every token in the game
            current_player: Player to act next
            turn_number: Round counter to resume from

        Returns:
            Session waiting for current_player to roll

        Raises:
            ValueError: If the tokens do not match the seated players, or
                        current_player is not seated or has already won
        """
        config = cls._resolve_config(config)
        players = config.players
        tokens = validate_token_set(tokens, players)
        win_state = WinConditions.compute_win_state(tokens, players)

        result = win_state.result_for(current_player)
        if result is None:
            raise ValueError(f"{current_player.value} is not seated in this game.")
        if result.has_won:
            raise ValueError(f"{current_player.value} has already finished every token.")

        session = GameSession(
            config=config,
            tokens=tokens,
            turn=TurnState(current_player=current_player, turn_number=turn_number),
            win_state=win_state,
        )
        if not WinConditions.should_continue(win_state, config.continue_after_winner):
            return replace(session, is_active=False)
        return session

    @classmethod
    def _require_playable(cls, session: GameSession) -> None:
        if not session.is_active:
            raise InvalidMoveError("The game is not active.")
        if session.is_paused:
            raise InvalidMoveError("The game is paused.")

    @classmethod
    def roll_dice(
        cls,
        session: GameSession,
        roll: int | None = None,
        rng: random.Random | None = None,
    ) -> GameSession:
        """
        Roll for the acting player.

        Args:
            session: Current session
            roll: Optional pre-determined value (for testing / replaying a
                  physical die)
            rng: Optional random source

        Returns:
            New session. A third consecutive six passes the turn at once;
            a roll with no legal move ends the turn (keeping the player if
            the roll earned an extra turn).

        Raises:
            InvalidMoveError: If rolling is not allowed right now
            ValueError: If a supplied roll is not a valid die value
        """
        cls._require_playable(session)
        if session.awaiting_move:
            raise InvalidMoveError("The previous roll has not been used yet.")
        if not TurnManager.can_roll(session.turn):
            raise InvalidMoveError(f"{session.current_player.value} may not roll again.")

        value = validate_roll(roll) if roll is not None else DiceEngine.roll(rng)
        prior_sixes = session.turn.consecutive_sixes
        turn = TurnManager.process_roll(session.turn, value)

        rolled = replace(
            session,
            turn=turn,
            last_roll=value,
            roll_count=session.roll_count + 1,
            captured_token_id=None,
            forfeited_turn=False,
        )

        if DiceEngine.grants_extra_turn(value) and DiceEngine.ends_turn_after_sixes(prior_sixes + 1):
            logger.debug("%s forfeits the turn after three sixes", session.current_player.value)
            return cls._pass_turn(replace(rolled, forfeited_turn=True), forced=True)

        moveable = TokenEngine.get_moveable_tokens(rolled.current_player_tokens, value)
        if not moveable:
            return cls.end_current_turn(rolled)

        ids = tuple(t.token_id for t in moveable)
        return replace(
            rolled,
            awaiting_move=True,
            moveable_token_ids=ids,
            selected_token_id=ids[0] if len(ids) == 1 else None,
        )

    @classmethod
    def select_token(cls, session: GameSession, token_id: str) -> GameSession:
        """Choose which moveable token the pending roll will move."""
        cls._require_playable(session)
        if token_id not in session.moveable_token_ids:
            raise InvalidMoveError(f"Token {token_id} cannot be moved now.")
        return replace(session, selected_token_id=token_id)

    @classmethod
    def move_token(cls, session: GameSession, token_id: str | None = None) -> GameSession:
        """
        Spend the pending roll on a token and finish the action.

        Args:
            session: Current session
            token_id: Token to move; defaults to the selected token

        Returns:
            New session with tokens, standings and turn updated

        Raises:
            InvalidMoveError: If there is no pending roll, the token does
                              not belong to the acting player, or the move
                              is illegal
        """
        cls._require_playable(session)
        if not session.awaiting_move or session.last_roll is None:
            raise InvalidMoveError("Roll the dice before moving.")

        token_id = token_id or session.selected_token_id
        if token_id is None:
            raise InvalidMoveError("No token selected.")

        token = TokenEngine.find_token(session.tokens, token_id)
        validate_token_owner(token, session.current_player)

        result = TokenEngine.move(token, session.last_roll, session.tokens)
        tokens = TokenEngine.apply_move(session.tokens, result)
        win_state = WinConditions.compute_win_state(tokens, session.players)

        if win_state.winner is not None and session.win_state.winner is None:
            logger.info("%s wins the game", win_state.winner.value)

        moved = replace(
            session,
            tokens=tokens,
            win_state=win_state,
            captured_token_id=(
                result.captured_token.token_id if result.captured_token else None
            ),
        )
        return cls.end_current_turn(moved)

    @classmethod
    def end_current_turn(cls, session: GameSession) -> GameSession:
        """
        Close the current action.

        The player keeps the turn on an extra roll; otherwise rotation moves
        on among the players still competing. The game ends once
        WinConditions.should_continue says so.
        """
        if not WinConditions.should_continue(
            session.win_state, session.config.continue_after_winner
        ):
            logger.info(
                "Game over, final order: %s",
                ", ".join(p.value for p in WinConditions.get_winners_in_order(session.win_state)),
            )
            return cls._clear_pending(replace(session, is_active=False))

        current = session.win_state.result_for(session.current_player)
        return cls._pass_turn(session, forced=current is not None and current.has_won)

    @classmethod
    def _pass_turn(cls, session: GameSession, forced: bool) -> GameSession:
        competing = session.competing_players
        if forced:
            turn = TurnManager.advance_to_next(session.turn, competing)
        else:
            turn = TurnManager.end_turn(session.turn, competing)
        return cls._clear_pending(replace(session, turn=turn))

    @classmethod
    def _clear_pending(cls, session: GameSession) -> GameSession:
        return replace(
            session,
            awaiting_move=False,
            moveable_token_ids=(),
            selected_token_id=None,
        )

    @classmethod
    def pause(cls, session: GameSession) -> GameSession:
        return replace(session, is_paused=True)

    @classmethod
    def resume(cls, session: GameSession) -> GameSession:
        return replace(session, is_paused=False)

    @classmethod
    def end_game(cls, session: GameSession) -> GameSession:
        """Stop the game early (e.g. the player quits)."""
        return cls._clear_pending(replace(session, is_active=False, is_paused=False))
