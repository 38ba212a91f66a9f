"""
Ludo - Game Event Definitions

Event types derived from session transitions, and the sound / haptic cues
that feedback collaborators play for them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

from src.engine.base import PlayerColor, TokenStatus
from src.engine.dice import DiceEngine
from src.session.state import GameSession

if TYPE_CHECKING:
    from src.config.settings import Settings


class GameEvent(Enum):
    """Events that can occur during a game."""

    GAME_STARTED = auto()
    DICE_ROLLED = auto()
    EXTRA_TURN = auto()
    TURN_FORFEITED = auto()
    TOKEN_OPENED = auto()
    TOKEN_MOVED = auto()
    TOKEN_CAPTURED = auto()
    TOKEN_FINISHED = auto()
    TURN_ADVANCED = auto()
    PLAYER_WON = auto()
    GAME_OVER = auto()


@dataclass
class EventPayload:
    """Wrapper for event data."""

    event: GameEvent
    player: PlayerColor | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FeedbackCue:
    """Named sound effect and haptic pattern for an event."""

    sound: str | None = None
    haptic: str | None = None


FEEDBACK_CUES: dict[GameEvent, FeedbackCue] = {
    GameEvent.DICE_ROLLED: FeedbackCue(sound="dice_roll", haptic="light"),
    GameEvent.TOKEN_OPENED: FeedbackCue(sound="token_move", haptic="medium"),
    GameEvent.TOKEN_MOVED: FeedbackCue(sound="token_move", haptic="light"),
    GameEvent.TOKEN_CAPTURED: FeedbackCue(sound="token_cut", haptic="heavy"),
    GameEvent.TOKEN_FINISHED: FeedbackCue(haptic="success"),
    GameEvent.TURN_FORFEITED: FeedbackCue(haptic="warning"),
    GameEvent.GAME_OVER: FeedbackCue(sound="win", haptic="success"),
}

# Token status transitions mapped to events
_TOKEN_EVENT_MAP: dict[tuple[TokenStatus, TokenStatus], GameEvent] = {
    (TokenStatus.HOME, TokenStatus.ACTIVE): GameEvent.TOKEN_OPENED,
    (TokenStatus.ACTIVE, TokenStatus.ACTIVE): GameEvent.TOKEN_MOVED,
    (TokenStatus.ACTIVE, TokenStatus.HOME): GameEvent.TOKEN_CAPTURED,
    (TokenStatus.ACTIVE, TokenStatus.FINISHED): GameEvent.TOKEN_FINISHED,
}


def classify_token_changes(before: GameSession, after: GameSession) -> list[EventPayload]:
    """Determine token events between two sessions."""
    previous = {t.token_id: t for t in before.tokens}
    events: list[EventPayload] = []

    for token in after.tokens:
        old = previous.get(token.token_id)
        if old is None or old == token:
            continue
        event = _TOKEN_EVENT_MAP.get((old.status, token.status))
        if event is None:
            continue
        events.append(
            EventPayload(
                event=event,
                player=token.player,
                data={
                    "token_id": token.token_id,
                    "from_distance": old.distance_traveled,
                    "to_distance": token.distance_traveled,
                    "position": token.position,
                },
            )
        )

    # The mover's event comes before the capture it caused
    events.sort(key=lambda e: e.event == GameEvent.TOKEN_CAPTURED)
    return events


def classify_transition(
    before: GameSession | None, after: GameSession
) -> list[EventPayload]:
    """
    Determine the game events produced by a session transition.

    Args:
        before: Session prior to the action (None for a freshly started game)
        after: Session after the action

    Returns:
        Events in the order they happened
    """
    if before is None:
        return [
            EventPayload(
                event=GameEvent.GAME_STARTED,
                player=after.current_player,
                data={"players": [p.value for p in after.players]},
            )
        ]

    events: list[EventPayload] = []
    actor = before.current_player

    if after.roll_count > before.roll_count:
        events.append(
            EventPayload(event=GameEvent.DICE_ROLLED, player=actor, data={"roll": after.last_roll})
        )
        if after.forfeited_turn:
            events.append(EventPayload(event=GameEvent.TURN_FORFEITED, player=actor))
        elif DiceEngine.grants_extra_turn(after.last_roll):
            events.append(EventPayload(event=GameEvent.EXTRA_TURN, player=actor))

    events.extend(classify_token_changes(before, after))

    previously_won = {r.player for r in before.win_state.rankings if r.has_won}
    newly_won = [
        r.player for r in after.win_state.rankings
        if r.has_won and r.player not in previously_won
    ]
    for player in newly_won:
        events.append(EventPayload(event=GameEvent.PLAYER_WON, player=player))

    if before.is_active and not after.is_active and after.win_state.is_game_over:
        events.append(
            EventPayload(
                event=GameEvent.GAME_OVER,
                player=after.win_state.winner,
                data={"rankings": [r.player.value for r in after.win_state.rankings]},
            )
        )
    elif after.current_player != before.current_player:
        events.append(
            EventPayload(
                event=GameEvent.TURN_ADVANCED,
                player=after.current_player,
                data={"turn_number": after.turn.turn_number},
            )
        )

    return events


def feedback_for(events: list[EventPayload], settings: Settings) -> list[FeedbackCue]:
    """Cues to play for a batch of events, honouring the audio/haptics toggles."""
    cues: list[FeedbackCue] = []
    for payload in events:
        cue = FEEDBACK_CUES.get(payload.event)
        if cue is None:
            continue
        cue = FeedbackCue(
            sound=cue.sound if settings.audio_enabled else None,
            haptic=cue.haptic if settings.haptics_enabled else None,
        )
        if cue.sound or cue.haptic:
            cues.append(cue)
    return cues
