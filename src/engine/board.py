"""
Ludo - Board Model

Position arithmetic over the shared 72-cell circular track, split into four
18-cell quadrants, plus each player's private 6-cell finish lane.

A token's distance traveled is the authoritative progress counter:
- 0-51:  on the shared track, at (start offset + distance) mod 72
- 52-57: inside the player's finish lane (off the shared track)
- 58:    finished

All methods are stateless class methods.
"""

from src.engine.base import (
    FINISH_DISTANCE,
    MAIN_TRACK_DISTANCE,
    NO_POSITION,
    SAFE_CELLS,
    TRACK_LENGTH,
    PlayerColor,
)


class BoardEngine:
    """Stateless board geometry."""

    @classmethod
    def advance(cls, position: int, roll: int) -> int:
        """Cell reached by moving `roll` cells forward from `position`."""
        return (position + roll) % TRACK_LENGTH

    @classmethod
    def start_offset(cls, player: PlayerColor) -> int:
        """Entry cell for a player's tokens (player index x 18)."""
        return player.start_offset

    @classmethod
    def is_safe_cell(cls, position: int) -> bool:
        """Tokens on a safe cell cannot be captured."""
        return position % TRACK_LENGTH in SAFE_CELLS

    @classmethod
    def distance_traveled(
        cls,
        position: int,
        start_offset: int,
        laps_completed: int = 0,
    ) -> int:
        """
        Convert an absolute cell back into player-relative distance.

        Args:
            position: Absolute track cell (0-71)
            start_offset: The player's entry cell
            laps_completed: Full laps already made around the track

        Returns:
            Distance from the entry cell, never negative
        """
        if position >= start_offset:
            distance = position - start_offset
        else:
            distance = TRACK_LENGTH - start_offset + position
        return distance + laps_completed * TRACK_LENGTH

    @classmethod
    def finish_lane_index(cls, distance: int) -> int:
        """
        Cell within the finish lane for a given distance.

        Returns 0-6 for distances 52-58 and -1 otherwise. A distance of 58
        is finished; check is_finished before rendering a lane cell.
        """
        if distance < MAIN_TRACK_DISTANCE or distance > FINISH_DISTANCE:
            return NO_POSITION
        return distance - MAIN_TRACK_DISTANCE

    @classmethod
    def is_finished(cls, distance: int) -> bool:
        return distance == FINISH_DISTANCE

    @classmethod
    def is_legal_move(cls, distance: int, roll: int) -> bool:
        """
        Check whether a token at `distance` may move `roll` cells.

        Inside the finish lane the roll must not overshoot the finish;
        on the main track every roll is legal.
        """
        if distance >= FINISH_DISTANCE:
            return False
        if distance >= MAIN_TRACK_DISTANCE:
            return distance + roll <= FINISH_DISTANCE
        return True

    @classmethod
    def absolute_position(cls, player: PlayerColor, distance: int) -> int:
        """Track cell for a token at `distance`, or -1 once off the shared track."""
        if distance >= MAIN_TRACK_DISTANCE:
            return NO_POSITION
        return cls.advance(player.start_offset, distance)
