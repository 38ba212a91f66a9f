"""
Ludo Rules Engine.

Pure Python game logic with zero UI/database dependencies.
Handles dice, board geometry, token movement and captures, turn rotation
and win detection.
"""

from src.engine.base import (
    AIDifficulty,
    GameConfig,
    GameMode,
    GameWinState,
    InvalidMoveError,
    MoveResult,
    PlayerColor,
    PlayerResult,
    Token,
    TokenStatus,
    TurnState,
)
from src.engine.board import BoardEngine
from src.engine.dice import DiceEngine
from src.engine.tokens import TokenEngine
from src.engine.turns import TurnManager
from src.engine.win_conditions import WinConditions

__all__ = [
    # Data Classes
    "GameConfig",
    "GameWinState",
    "MoveResult",
    "PlayerResult",
    "Token",
    "TurnState",
    # Enums
    "AIDifficulty",
    "GameMode",
    "PlayerColor",
    "TokenStatus",
    # Errors
    "InvalidMoveError",
    # Engines
    "BoardEngine",
    "DiceEngine",
    "TokenEngine",
    "TurnManager",
    "WinConditions",
]
