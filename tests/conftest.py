"""
Ludo - Test Configuration and Fixtures

Common fixtures for all test modules. Token builders live in builders.py.
"""

import random

import pytest

from src.config.settings import get_settings
from src.engine.base import PlayerColor, Token
from src.engine.tokens import TokenEngine


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Read settings from a clean environment in every test."""
    monkeypatch.delenv("CONTINUE_AFTER_WINNER", raising=False)
    monkeypatch.delenv("AI_DIFFICULTY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def two_players() -> tuple[PlayerColor, ...]:
    return (PlayerColor.RED, PlayerColor.BLUE)


@pytest.fixture
def four_players() -> tuple[PlayerColor, ...]:
    return tuple(PlayerColor)


@pytest.fixture
def fresh_tokens(two_players) -> tuple[Token, ...]:
    """All tokens for a two-player game, in home."""
    return TokenEngine.create_tokens(two_players)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible games."""
    return random.Random(1234)


class ScriptedRandom(random.Random):
    """Random source that replays fixed die values."""

    def __init__(self, values):
        super().__init__(0)
        self._values = list(values)

    def randint(self, a, b):
        return self._values.pop(0)


@pytest.fixture
def scripted_rng():
    """Factory for a random source that yields the given die values."""
    return ScriptedRandom
