"""
Ludo - Input Validation Utilities

Provides validation functions for engine inputs supplied from outside the
engine (UI, AI, fixtures). All validators either return validated data or
raise descriptive exceptions.
"""

from typing import Any, Sequence

from src.engine.base import (
    DIE_MAX,
    DIE_MIN,
    MAX_PLAYERS,
    MIN_PLAYERS,
    TOKENS_PER_PLAYER,
    InvalidMoveError,
    PlayerColor,
    Token,
)
from src.engine.dice import DiceEngine


def validate_roll(value: Any) -> int:
    """
    Validate an externally supplied dice value.

    Args:
        value: Value to validate

    Returns:
        The value as a validated die face

    Raises:
        ValueError: If the value is not an integer between 1 and 6
    """
    if not DiceEngine.is_valid_roll(value):
        raise ValueError(
            f"Dice value must be an integer between {DIE_MIN} and {DIE_MAX}, got {value!r}."
        )
    return value


def validate_player_count(count: int) -> int:
    """
    Validate number of players.

    Raises:
        ValueError: If count is not 2-4
    """
    if not isinstance(count, int) or isinstance(count, bool):
        raise ValueError(f"Player count must be an integer, got {type(count).__name__}.")

    if not (MIN_PLAYERS <= count <= MAX_PLAYERS):
        raise ValueError(f"Player count must be {MIN_PLAYERS}-{MAX_PLAYERS}, got {count}.")

    return count


def validate_active_players(players: Sequence[PlayerColor]) -> tuple[PlayerColor, ...]:
    """
    Validate the seated players and put them in turn order.

    Args:
        players: Participating colours, in any order

    Returns:
        The players as a tuple in the fixed cyclic colour order

    Raises:
        ValueError: If a colour is repeated, unknown, or the count is not 2-4
    """
    for player in players:
        if not isinstance(player, PlayerColor):
            raise ValueError(f"Unknown player {player!r}.")

    if len(set(players)) != len(players):
        raise ValueError("Each colour may only be seated once.")

    validate_player_count(len(players))
    return tuple(p for p in PlayerColor if p in players)


def validate_token_set(
    tokens: Sequence[Token],
    players: Sequence[PlayerColor],
) -> tuple[Token, ...]:
    """
    Validate that every seated player owns exactly one token per index.

    Raises:
        ValueError: If tokens are missing, duplicated, or owned by an
                    unseated player
    """
    seen: set[str] = set()
    for token in tokens:
        if token.player not in players:
            raise ValueError(f"Token {token.token_id} belongs to a player who is not seated.")
        if token.token_id in seen:
            raise ValueError(f"Duplicate token {token.token_id}.")
        seen.add(token.token_id)

    expected = len(players) * TOKENS_PER_PLAYER
    if len(seen) != expected:
        raise ValueError(f"Expected {expected} tokens, got {len(seen)}.")

    return tuple(tokens)


def validate_token_owner(token: Token, player: PlayerColor) -> Token:
    """
    Check that the acting player owns the token.

    Raises:
        InvalidMoveError: If the token belongs to someone else
    """
    if token.player != player:
        raise InvalidMoveError(
            f"Token {token.token_id} does not belong to {player.value}."
        )
    return token
