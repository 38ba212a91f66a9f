"""
Ludo - Token Movement

Per-token state transitions (home -> active -> finished), move legality and
capture ("cutting") resolution.

Game Rules:
- A token leaves home only on a 6 and enters at its player's start cell
- Active tokens move forward by the roll; the finish must be hit exactly
- Landing on an opponent's active token outside a safe cell sends it home
- Tokens of the same colour never capture each other

All methods are stateless class methods operating on immutable tokens.
"""

import logging
from dataclasses import replace
from typing import Iterable, Sequence

from src.engine.base import (
    FINISH_DISTANCE,
    NO_POSITION,
    TOKENS_PER_PLAYER,
    InvalidMoveError,
    MoveResult,
    PlayerColor,
    Token,
    TokenStatus,
)
from src.engine.board import BoardEngine
from src.engine.dice import DiceEngine

logger = logging.getLogger(__name__)


class TokenEngine:
    """Stateless engine for token movement and captures."""

    @classmethod
    def create_token(cls, player: PlayerColor, index: int) -> Token:
        """Create a token waiting in home."""
        return Token(player=player, index=index)

    @classmethod
    def create_tokens(cls, players: Iterable[PlayerColor]) -> tuple[Token, ...]:
        """Create the full starting token set for the given players."""
        return tuple(
            cls.create_token(player, index)
            for player in players
            for index in range(TOKENS_PER_PLAYER)
        )

    @classmethod
    def can_move(cls, token: Token, roll: int) -> bool:
        """
        Check whether a token may move with the given roll.

        Args:
            token: Token to check
            roll: Dice value

        Returns:
            True if the token is home and the roll opens it, or the token
            is active and the board allows the move
        """
        if token.status == TokenStatus.HOME:
            return DiceEngine.can_open_token(roll)
        if token.status == TokenStatus.FINISHED:
            return False
        return DiceEngine.is_valid_roll(roll) and BoardEngine.is_legal_move(
            token.distance_traveled, roll
        )

    @classmethod
    def open_token(cls, token: Token) -> Token:
        """Place a home token on its player's start cell."""
        if token.status != TokenStatus.HOME:
            raise InvalidMoveError(
                f"Can only open tokens that are in home, {token.token_id} is {token.status.value}."
            )
        return replace(
            token,
            status=TokenStatus.ACTIVE,
            position=BoardEngine.start_offset(token.player),
            distance_traveled=0,
        )

    @classmethod
    def send_home(cls, token: Token) -> Token:
        """Return a captured token to home."""
        return replace(
            token,
            status=TokenStatus.HOME,
            position=NO_POSITION,
            distance_traveled=0,
        )

    @classmethod
    def find_collision(cls, token: Token, all_tokens: Sequence[Token]) -> Token | None:
        """
        Find the opponent token sharing the moving token's track cell.

        Only the first match is returned; under normal play at most one
        opponent can stand on a non-safe cell.
        """
        if not token.on_track:
            return None
        for other in all_tokens:
            if (
                other.token_id != token.token_id
                and other.player != token.player
                and other.on_track
                and other.position == token.position
            ):
                return other
        return None

    @classmethod
    def move(cls, token: Token, roll: int, all_tokens: Sequence[Token]) -> MoveResult:
        """
        Move a token and resolve any capture.

        Args:
            token: Token to move
            roll: Dice value
            all_tokens: Every token in the game (for collision detection)

        Returns:
            MoveResult with the moved token and the captured token, if any

        Raises:
            InvalidMoveError: If can_move is false for this token and roll
        """
        if not cls.can_move(token, roll):
            raise InvalidMoveError(
                f"Token {token.token_id} cannot move with a roll of {roll}."
            )

        if token.status == TokenStatus.HOME:
            moved = cls.open_token(token)
        else:
            new_distance = token.distance_traveled + roll
            if BoardEngine.is_finished(new_distance):
                finished = replace(
                    token,
                    status=TokenStatus.FINISHED,
                    position=NO_POSITION,
                    distance_traveled=FINISH_DISTANCE,
                )
                logger.debug("Token %s finished", finished.token_id)
                return MoveResult(token=finished)

            moved = replace(
                token,
                position=BoardEngine.absolute_position(token.player, new_distance),
                distance_traveled=new_distance,
            )

        if not moved.on_track or BoardEngine.is_safe_cell(moved.position):
            return MoveResult(token=moved)

        victim = cls.find_collision(moved, all_tokens)
        if victim is None:
            return MoveResult(token=moved)

        captured = cls.send_home(victim)
        logger.debug(
            "Token %s captured %s on cell %d",
            moved.token_id, victim.token_id, moved.position,
        )
        return MoveResult(token=moved, did_capture=True, captured_token=captured)

    @classmethod
    def apply_move(cls, all_tokens: Sequence[Token], result: MoveResult) -> tuple[Token, ...]:
        """Return a new token collection with the move's side effects applied."""
        updates = {result.token.token_id: result.token}
        if result.captured_token is not None:
            updates[result.captured_token.token_id] = result.captured_token
        return tuple(updates.get(t.token_id, t) for t in all_tokens)

    @classmethod
    def get_moveable_tokens(cls, tokens: Sequence[Token], roll: int) -> tuple[Token, ...]:
        """Filter a player's tokens to those that can move with `roll`."""
        return tuple(t for t in tokens if cls.can_move(t, roll))

    @classmethod
    def has_tokens_in_home(cls, tokens: Sequence[Token]) -> bool:
        return any(t.status == TokenStatus.HOME for t in tokens)

    @classmethod
    def count_finished(cls, tokens: Sequence[Token]) -> int:
        return sum(1 for t in tokens if t.status == TokenStatus.FINISHED)

    @classmethod
    def tokens_for_player(
        cls, all_tokens: Sequence[Token], player: PlayerColor
    ) -> tuple[Token, ...]:
        """Select one player's tokens out of the full collection."""
        return tuple(t for t in all_tokens if t.player == player)

    @classmethod
    def find_token(cls, all_tokens: Sequence[Token], token_id: str) -> Token:
        """Look up a token by id."""
        for token in all_tokens:
            if token.token_id == token_id:
                return token
        raise InvalidMoveError(f"Unknown token {token_id!r}.")
