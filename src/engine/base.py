"""
Ludo - Game Engine Base Classes

This module defines the foundational data structures, enums and board
constants used throughout the rules engine. All classes are immutable
(frozen dataclasses) so state can be passed in and fresh state returned,
never mutated in place.
"""

from dataclasses import dataclass
from enum import Enum


# Board geometry
TRACK_LENGTH = 72
QUADRANT_SIZE = 18
MAIN_TRACK_DISTANCE = 52
FINISH_LANE_LENGTH = 6
FINISH_DISTANCE = MAIN_TRACK_DISTANCE + FINISH_LANE_LENGTH  # 58
TOKENS_PER_PLAYER = 4
NO_POSITION = -1

# Each player's start cell plus one extra cell per quadrant
SAFE_CELLS: frozenset[int] = frozenset({0, 13, 18, 31, 36, 49, 54, 67})

# Dice
DIE_MIN = 1
DIE_MAX = 6
EXTRA_TURN_VALUE = 6
OPEN_TOKEN_VALUE = 6
MAX_CONSECUTIVE_SIXES = 3

MIN_PLAYERS = 2
MAX_PLAYERS = 4


class InvalidMoveError(ValueError):
    """Raised when a move is attempted that the rules do not allow."""


class PlayerColor(Enum):
    """Player slots in fixed turn order."""
    RED = "red"        # first
    BLUE = "blue"      # second
    GREEN = "green"    # third
    YELLOW = "yellow"  # fourth

    @property
    def index(self) -> int:
        """Position of this colour in the cyclic turn order."""
        return list(PlayerColor).index(self)

    @property
    def start_offset(self) -> int:
        """Track cell where this player's tokens enter the board."""
        return self.index * QUADRANT_SIZE


class TokenStatus(Enum):
    """Lifecycle of a token."""
    HOME = "home"
    ACTIVE = "active"
    FINISHED = "finished"


class GameMode(Enum):
    """Available game modes."""
    ONE_PLAYER = "1p"    # human vs AI
    TWO_PLAYER = "2p"
    THREE_PLAYER = "3p"
    FOUR_PLAYER = "4p"

    @property
    def players(self) -> tuple[PlayerColor, ...]:
        """Active players for this mode, in turn order."""
        count = {
            GameMode.ONE_PLAYER: 2,
            GameMode.TWO_PLAYER: 2,
            GameMode.THREE_PLAYER: 3,
            GameMode.FOUR_PLAYER: 4,
        }[self]
        return tuple(list(PlayerColor)[:count])


class AIDifficulty(Enum):
    """How carefully the AI picks among legal moves."""
    EASY = "easy"      # random legal move
    MEDIUM = "medium"  # random among the two best
    HARD = "hard"      # always the best


@dataclass(frozen=True)
class Token:
    """
    Immutable representation of a single token.

    Attributes:
        player: Owning player
        index: Token number within the player's set (0-3)
        status: Home, active or finished
        position: Absolute track cell (0-71), or -1 when in home, in the
                  private finish lane, or finished
        distance_traveled: Player-relative progress (0-58); authoritative
                           for legality and finish checks
    """
    player: PlayerColor
    index: int
    status: TokenStatus = TokenStatus.HOME
    position: int = NO_POSITION
    distance_traveled: int = 0

    def __post_init__(self) -> None:
        """Validate token invariants."""
        if not (0 <= self.index < TOKENS_PER_PLAYER):
            raise ValueError(
                f"Token index must be between 0 and {TOKENS_PER_PLAYER - 1}, got {self.index}."
            )
        if not (0 <= self.distance_traveled <= FINISH_DISTANCE):
            raise ValueError(
                f"Distance traveled must be between 0 and {FINISH_DISTANCE}, "
                f"got {self.distance_traveled}."
            )
        if not (self.position == NO_POSITION or 0 <= self.position < TRACK_LENGTH):
            raise ValueError(f"Invalid track position {self.position}.")

        if self.status == TokenStatus.HOME:
            if self.position != NO_POSITION or self.distance_traveled != 0:
                raise ValueError("A home token has no position and no distance.")
        elif self.status == TokenStatus.FINISHED:
            if self.position != NO_POSITION or self.distance_traveled != FINISH_DISTANCE:
                raise ValueError(
                    f"A finished token sits at distance {FINISH_DISTANCE} with no position."
                )
        elif self.distance_traveled == FINISH_DISTANCE:
            raise ValueError(f"An active token cannot be at distance {FINISH_DISTANCE}.")

    @property
    def token_id(self) -> str:
        """Stable identifier, e.g. 'red-2'."""
        return f"{self.player.value}-{self.index}"

    @property
    def is_home(self) -> bool:
        return self.status == TokenStatus.HOME

    @property
    def is_active(self) -> bool:
        return self.status == TokenStatus.ACTIVE

    @property
    def is_finished(self) -> bool:
        return self.status == TokenStatus.FINISHED

    @property
    def on_track(self) -> bool:
        """True while the token occupies a shared track cell."""
        return self.is_active and self.position != NO_POSITION


@dataclass(frozen=True)
class MoveResult:
    """
    Complete side effect of a single move.

    Attributes:
        token: The moving token after the move
        did_capture: Whether an opponent token was sent home
        captured_token: The captured token in its new home state, if any
    """
    token: Token
    did_capture: bool = False
    captured_token: Token | None = None


@dataclass(frozen=True)
class TurnState:
    """
    Whose turn it is and what they have rolled so far.

    Attributes:
        current_player: Player allowed to act
        consecutive_sixes: Sixes rolled in a row this turn (never left at 3)
        has_extra_turn: Whether the player rolls again after this move
        turn_number: Full rounds started, beginning at 1
    """
    current_player: PlayerColor
    consecutive_sixes: int = 0
    has_extra_turn: bool = False
    turn_number: int = 1


@dataclass(frozen=True)
class PlayerResult:
    """
    Standing of a single player.

    Attributes:
        player: Player colour
        finished_count: Number of finished tokens
        has_won: Whether all tokens are finished
        rank: Assigned by the win-state aggregator (0 = unranked)
    """
    player: PlayerColor
    finished_count: int
    has_won: bool
    rank: int = 0


@dataclass(frozen=True)
class GameWinState:
    """
    Derived win state of a game.

    Attributes:
        is_game_over: Whether some player has finished all tokens
        winner: First player by ranking with all tokens finished
        rankings: Results ordered by finished tokens, best first
    """
    is_game_over: bool
    winner: PlayerColor | None
    rankings: tuple[PlayerResult, ...]

    def result_for(self, player: PlayerColor) -> PlayerResult | None:
        """Look up a single player's result."""
        for result in self.rankings:
            if result.player == player:
                return result
        return None


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a game session.

    Attributes:
        mode: Game mode (number of seats, and whether one human faces AI)
        continue_after_winner: Keep playing for the remaining placements
    """
    mode: GameMode
    continue_after_winner: bool = True

    @property
    def players(self) -> tuple[PlayerColor, ...]:
        return self.mode.players
