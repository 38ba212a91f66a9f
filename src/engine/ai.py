"""
Ludo - AI Move Selection

Simple priority heuristic for computer opponents. It reads only the engine's
public queries and token fields; the rules themselves never know whether a
move came from a human or the AI.
"""

import random
from typing import Sequence

from src.config.settings import Settings, get_settings
from src.engine.base import (
    NO_POSITION,
    TRACK_LENGTH,
    AIDifficulty,
    GameMode,
    PlayerColor,
    Token,
    TokenStatus,
)
from src.engine.board import BoardEngine
from src.engine.tokens import TokenEngine


# Priority weights
OPEN_BONUS = 10
NEAR_FINISH_THRESHOLD = 45
NEAR_FINISH_BONUS = 20
CAPTURE_BONUS = 30
LAGGING_THRESHOLD = 20
LAGGING_BONUS = 5
DANGER_RANGE = 6
DANGER_BONUS = 8


def _landing_cell(token: Token, roll: int) -> int:
    """Track cell the token would land on, or -1 if off the shared track."""
    if token.status == TokenStatus.HOME:
        return BoardEngine.start_offset(token.player)
    return BoardEngine.absolute_position(token.player, token.distance_traveled + roll)


def _would_capture(token: Token, roll: int, all_tokens: Sequence[Token]) -> bool:
    target = _landing_cell(token, roll)
    if target == NO_POSITION or BoardEngine.is_safe_cell(target):
        return False
    return any(
        t.player != token.player and t.on_track and t.position == target
        for t in all_tokens
    )


def _in_danger(token: Token, all_tokens: Sequence[Token]) -> bool:
    """An opponent sits within striking range behind this token."""
    if not token.on_track or BoardEngine.is_safe_cell(token.position):
        return False
    for other in all_tokens:
        if other.player == token.player or not other.on_track:
            continue
        gap = (token.position - other.position) % TRACK_LENGTH
        if 0 < gap <= DANGER_RANGE:
            return True
    return False


def token_priority(token: Token, roll: int, all_tokens: Sequence[Token]) -> int:
    """
    Score a candidate move; higher means more attractive.

    Args:
        token: Token that could move
        roll: Current dice value
        all_tokens: Every token in the game

    Returns:
        Priority score
    """
    priority = 0

    if token.status == TokenStatus.HOME:
        priority += OPEN_BONUS

    if token.status == TokenStatus.ACTIVE:
        if token.distance_traveled >= NEAR_FINISH_THRESHOLD:
            priority += NEAR_FINISH_BONUS + (token.distance_traveled - NEAR_FINISH_THRESHOLD)
        if token.distance_traveled < LAGGING_THRESHOLD:
            priority += LAGGING_BONUS
        if _in_danger(token, all_tokens):
            priority += DANGER_BONUS

    if _would_capture(token, roll, all_tokens):
        priority += CAPTURE_BONUS

    return priority


def select_move(
    player_tokens: Sequence[Token],
    roll: int,
    all_tokens: Sequence[Token],
    difficulty: AIDifficulty | None = None,
    rng: random.Random | None = None,
) -> Token | None:
    """
    Pick a token for the AI to move.

    Args:
        player_tokens: The AI player's tokens
        roll: Current dice value
        all_tokens: Every token in the game
        difficulty: AI difficulty level; defaults to the configured one
        rng: Optional random source

    Returns:
        Token to move, or None when nothing can move
    """
    source = rng if rng is not None else random
    moveable = TokenEngine.get_moveable_tokens(player_tokens, roll)

    if not moveable:
        return None
    if len(moveable) == 1:
        return moveable[0]

    if difficulty is None:
        difficulty = get_ai_difficulty(moveable[0].player)

    if difficulty == AIDifficulty.EASY:
        return source.choice(moveable)

    ranked = sorted(
        moveable,
        key=lambda t: token_priority(t, roll, all_tokens),
        reverse=True,
    )
    if difficulty == AIDifficulty.HARD:
        return ranked[0]
    return source.choice(ranked[:2])


def is_ai_player(player: PlayerColor, mode: GameMode) -> bool:
    """In single-player mode every seat except the first is computer-controlled."""
    return mode == GameMode.ONE_PLAYER and player != PlayerColor.RED


def get_ai_difficulty(player: PlayerColor, settings: Settings | None = None) -> AIDifficulty:
    """Difficulty for an AI seat. Every AI seat shares the configured level."""
    settings = settings or get_settings()
    return settings.ai_difficulty
