"""
Ludo Game Session.

Immutable game state owned by the caller, plus the events its transitions
produce for audio/haptic feedback.
"""

from src.session.events import (
    EventPayload,
    FeedbackCue,
    GameEvent,
    classify_transition,
    feedback_for,
)
from src.session.state import GameSession, SessionEngine

__all__ = [
    "EventPayload",
    "FeedbackCue",
    "GameEvent",
    "GameSession",
    "SessionEngine",
    "classify_transition",
    "feedback_for",
]
