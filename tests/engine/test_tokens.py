"""
Ludo - Token Movement Tests

Opening, advancing, finishing, captures and the invalid-move contract.
"""

import pytest

from builders import active, finished, home
from src.engine.base import (
    NO_POSITION,
    InvalidMoveError,
    PlayerColor,
    TokenStatus,
)
from src.engine.tokens import TokenEngine

RED = PlayerColor.RED
BLUE = PlayerColor.BLUE
GREEN = PlayerColor.GREEN
YELLOW = PlayerColor.YELLOW


class TestCreateTokens:
    """Tests for create_token() and create_tokens()."""

    def test_four_tokens_per_player(self, fresh_tokens):
        assert len(fresh_tokens) == 8
        assert len(TokenEngine.tokens_for_player(fresh_tokens, RED)) == 4

    def test_all_start_home(self, fresh_tokens):
        for token in fresh_tokens:
            assert token.status == TokenStatus.HOME
            assert token.position == NO_POSITION
            assert token.distance_traveled == 0

    def test_ids_are_unique(self, fresh_tokens):
        assert len({t.token_id for t in fresh_tokens}) == len(fresh_tokens)

    def test_token_id_format(self):
        assert TokenEngine.create_token(GREEN, 2).token_id == "green-2"


class TestCanMove:
    """Tests for TokenEngine.can_move()."""

    def test_home_needs_six(self):
        assert TokenEngine.can_move(home(RED), 6) is True
        for roll in range(1, 6):
            assert TokenEngine.can_move(home(RED), roll) is False

    def test_finished_never_moves(self):
        for roll in range(1, 7):
            assert TokenEngine.can_move(finished(RED, 0), roll) is False

    def test_active_follows_board(self):
        assert TokenEngine.can_move(active(RED, 0, 20), 3) is True
        assert TokenEngine.can_move(active(RED, 0, 55), 3) is True
        assert TokenEngine.can_move(active(RED, 0, 55), 4) is False

    def test_invalid_roll_cannot_move(self):
        assert TokenEngine.can_move(active(RED, 0, 20), 7) is False


class TestOpening:
    """Tests for opening a token from home."""

    def test_six_opens_to_start_offset(self):
        result = TokenEngine.move(home(BLUE), 6, [])
        assert result.token.status == TokenStatus.ACTIVE
        assert result.token.position == 18
        assert result.token.distance_traveled == 0
        assert result.did_capture is False

    def test_open_token_requires_home(self):
        with pytest.raises(InvalidMoveError):
            TokenEngine.open_token(active(RED, 0, 5))

    def test_opening_on_occupied_start_cell_never_captures(self):
        # Yellow at distance 18 stands on red's start cell, which is safe
        yellow = active(YELLOW, 0, 18)
        assert yellow.position == 0

        result = TokenEngine.move(home(RED), 6, [yellow])
        assert result.did_capture is False
        assert result.captured_token is None


class TestAdvancing:
    """Tests for moving active tokens."""

    def test_moves_forward(self):
        result = TokenEngine.move(active(RED, 0, 10), 4, [])
        assert result.token.distance_traveled == 14
        assert result.token.position == 14

    def test_position_wraps_for_later_colours(self):
        result = TokenEngine.move(active(YELLOW, 0, 16), 5, [])
        assert result.token.distance_traveled == 21
        assert result.token.position == 3

    def test_entering_finish_lane_leaves_track(self):
        result = TokenEngine.move(active(RED, 0, 50), 3, [])
        assert result.token.status == TokenStatus.ACTIVE
        assert result.token.distance_traveled == 53
        assert result.token.position == NO_POSITION

    def test_exact_roll_finishes(self):
        result = TokenEngine.move(active(RED, 0, 57), 1, [])
        assert result.token.status == TokenStatus.FINISHED
        assert result.token.distance_traveled == 58
        assert result.token.position == NO_POSITION

    def test_finish_from_track_edge(self):
        result = TokenEngine.move(active(GREEN, 1, 52), 6, [])
        assert result.token.status == TokenStatus.FINISHED


class TestInvalidMoves:
    """Moves for which can_move is false fail fast."""

    def test_overshoot_rejected(self):
        token = active(RED, 0, 55)
        with pytest.raises(InvalidMoveError):
            TokenEngine.move(token, 4, [token])
        assert token.distance_traveled == 55

    def test_opening_without_six_rejected(self):
        with pytest.raises(InvalidMoveError):
            TokenEngine.move(home(RED), 5, [])

    def test_finished_token_rejected(self):
        with pytest.raises(InvalidMoveError):
            TokenEngine.move(finished(RED, 0), 1, [])

    def test_invalid_move_error_is_value_error(self):
        assert issubclass(InvalidMoveError, ValueError)


class TestCapture:
    """Tests for capture ("cutting") resolution."""

    def test_landing_on_opponent_sends_it_home(self):
        mover = active(RED, 0, 21)
        victim = active(BLUE, 0, 7)
        assert victim.position == 25

        result = TokenEngine.move(mover, 4, [mover, victim])

        assert result.token.position == 25
        assert result.did_capture is True
        assert result.captured_token.token_id == victim.token_id
        assert result.captured_token.status == TokenStatus.HOME
        assert result.captured_token.distance_traveled == 0
        assert result.captured_token.position == NO_POSITION

    def test_own_tokens_never_capture(self):
        mover = active(RED, 0, 21)
        friend = active(RED, 1, 25)

        result = TokenEngine.move(mover, 4, [mover, friend])
        assert result.did_capture is False

    def test_safe_cell_never_captures(self):
        mover = active(RED, 0, 27)
        opponent = active(BLUE, 0, 13)
        assert opponent.position == 31

        result = TokenEngine.move(mover, 4, [mover, opponent])
        assert result.token.position == 31
        assert result.did_capture is False

    def test_home_opponents_are_ignored(self):
        mover = active(RED, 0, 21)
        result = TokenEngine.move(mover, 4, [mover, home(BLUE)])
        assert result.did_capture is False

    def test_finish_lane_never_captures(self):
        mover = active(RED, 0, 50)
        result = TokenEngine.move(mover, 3, [mover, active(BLUE, 0, 40)])
        assert result.did_capture is False

    def test_only_first_opponent_is_captured(self):
        mover = active(RED, 0, 21)
        blue = active(BLUE, 0, 7)
        yellow = active(YELLOW, 0, 43)
        assert blue.position == yellow.position == 25

        result = TokenEngine.move(mover, 4, [mover, blue, yellow])
        assert result.captured_token.token_id == blue.token_id


class TestApplyMove:
    """Tests for TokenEngine.apply_move()."""

    def test_replaces_moved_and_captured_tokens_only(self):
        mover = active(RED, 0, 21)
        victim = active(BLUE, 0, 7)
        bystander = active(BLUE, 1, 30)
        tokens = (mover, victim, bystander)

        result = TokenEngine.move(mover, 4, tokens)
        updated = TokenEngine.apply_move(tokens, result)

        assert updated[0] == result.token
        assert updated[1] == result.captured_token
        assert updated[2] is bystander
        assert tokens[0] is mover

    def test_find_token_unknown_id(self, fresh_tokens):
        with pytest.raises(InvalidMoveError):
            TokenEngine.find_token(fresh_tokens, "purple-0")


class TestQueries:
    """Tests for moveable, home and finished queries."""

    def test_moveable_tokens_on_six(self, fresh_tokens):
        red = TokenEngine.tokens_for_player(fresh_tokens, RED)
        assert len(TokenEngine.get_moveable_tokens(red, 6)) == 4

    def test_no_moveable_tokens_from_home_without_six(self, fresh_tokens):
        red = TokenEngine.tokens_for_player(fresh_tokens, RED)
        assert TokenEngine.get_moveable_tokens(red, 3) == ()

    def test_mixed_tokens(self):
        tokens = [home(RED, 0), active(RED, 1, 10), active(RED, 2, 56), finished(RED, 3)]
        moveable = TokenEngine.get_moveable_tokens(tokens, 3)
        assert [t.index for t in moveable] == [1]

    def test_has_tokens_in_home(self):
        assert TokenEngine.has_tokens_in_home([home(RED), active(RED, 1, 3)]) is True
        assert TokenEngine.has_tokens_in_home([active(RED, 1, 3)]) is False

    def test_count_finished(self):
        tokens = [finished(RED, 0), finished(RED, 1), active(RED, 2, 10), home(RED, 3)]
        assert TokenEngine.count_finished(tokens) == 2
