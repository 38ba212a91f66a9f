"""
Ludo - Dice Engine

A single six-sided die. Rolling a 6 opens a token from home and earns an
extra roll; the third six in a row forfeits the turn.

All methods are stateless class methods.
"""

import random
from typing import Any

from src.engine.base import (
    DIE_MAX,
    DIE_MIN,
    EXTRA_TURN_VALUE,
    MAX_CONSECUTIVE_SIXES,
    OPEN_TOKEN_VALUE,
)


class DiceEngine:
    """Stateless dice rules."""

    @classmethod
    def roll(cls, rng: random.Random | None = None) -> int:
        """Roll a single D6.

        Args:
            rng: Optional random source (for reproducible games)

        Returns:
            Uniformly distributed value in 1-6
        """
        source = rng if rng is not None else random
        return source.randint(DIE_MIN, DIE_MAX)

    @classmethod
    def grants_extra_turn(cls, value: Any) -> bool:
        """True iff the roll earns another roll (a 6)."""
        return cls.is_valid_roll(value) and value == EXTRA_TURN_VALUE

    @classmethod
    def can_open_token(cls, value: Any) -> bool:
        """True iff the roll lets a token leave home (a 6).

        Kept separate from grants_extra_turn even though both rules
        currently use the same face.
        """
        return cls.is_valid_roll(value) and value == OPEN_TOKEN_VALUE

    @classmethod
    def is_valid_roll(cls, value: Any) -> bool:
        """Check that a value could have come off the die.

        Rejects non-integers (floats included, even 6.0), booleans,
        NaN, infinities and anything outside 1-6.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return DIE_MIN <= value <= DIE_MAX

    @classmethod
    def ends_turn_after_sixes(cls, consecutive_sixes: int) -> bool:
        """True once the run of sixes reaches the forced-end threshold."""
        return consecutive_sixes >= MAX_CONSECUTIVE_SIXES
