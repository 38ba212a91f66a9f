"""
Ludo - Board Model Tests
"""

import pytest

from src.engine.base import NO_POSITION, SAFE_CELLS, PlayerColor
from src.engine.board import BoardEngine


class TestAdvance:
    """Tests for BoardEngine.advance()."""

    def test_result_always_on_track(self):
        for position in range(72):
            for roll in range(1, 7):
                assert 0 <= BoardEngine.advance(position, roll) < 72

    def test_simple_advance(self):
        assert BoardEngine.advance(10, 4) == 14

    def test_wraps_around(self):
        assert BoardEngine.advance(70, 5) == 3


class TestStartOffset:
    """Tests for BoardEngine.start_offset()."""

    def test_offsets(self):
        assert BoardEngine.start_offset(PlayerColor.RED) == 0
        assert BoardEngine.start_offset(PlayerColor.BLUE) == 18
        assert BoardEngine.start_offset(PlayerColor.GREEN) == 36
        assert BoardEngine.start_offset(PlayerColor.YELLOW) == 54

    def test_evenly_spaced(self):
        offsets = sorted(BoardEngine.start_offset(p) for p in PlayerColor)
        gaps = [b - a for a, b in zip(offsets, offsets[1:])]
        assert gaps == [18, 18, 18]
        assert (offsets[-1] - offsets[0]) % 72 == 54


class TestSafeCells:
    """Tests for BoardEngine.is_safe_cell()."""

    @pytest.mark.parametrize("cell", [0, 13, 18, 31, 36, 49, 54, 67])
    def test_safe_cells(self, cell):
        assert BoardEngine.is_safe_cell(cell) is True

    def test_exactly_eight_safe_cells(self):
        assert sum(BoardEngine.is_safe_cell(c) for c in range(72)) == 8

    def test_start_cells_are_safe(self):
        for player in PlayerColor:
            assert BoardEngine.start_offset(player) in SAFE_CELLS

    @pytest.mark.parametrize("cell", [1, 12, 14, 30, 50, 71])
    def test_other_cells_unsafe(self, cell):
        assert BoardEngine.is_safe_cell(cell) is False


class TestDistanceTraveled:
    """Tests for BoardEngine.distance_traveled()."""

    def test_ahead_of_start(self):
        assert BoardEngine.distance_traveled(25, 18) == 7

    def test_wrapped_past_zero(self):
        assert BoardEngine.distance_traveled(4, 54) == 22

    def test_at_start(self):
        assert BoardEngine.distance_traveled(36, 36) == 0

    def test_laps_added(self):
        assert BoardEngine.distance_traveled(20, 18, laps_completed=1) == 74

    def test_never_negative(self):
        for start in (0, 18, 36, 54):
            for position in range(72):
                assert BoardEngine.distance_traveled(position, start) >= 0


class TestFinishLane:
    """Tests for finish_lane_index() and is_finished()."""

    @pytest.mark.parametrize("distance", [0, 30, 51])
    def test_not_in_lane_on_main_track(self, distance):
        assert BoardEngine.finish_lane_index(distance) == NO_POSITION

    @pytest.mark.parametrize("distance,index", [(52, 0), (55, 3), (57, 5), (58, 6)])
    def test_lane_index(self, distance, index):
        assert BoardEngine.finish_lane_index(distance) == index

    def test_beyond_finish_is_sentinel(self):
        assert BoardEngine.finish_lane_index(59) == NO_POSITION

    def test_finished_only_at_58(self):
        assert BoardEngine.is_finished(58) is True
        for distance in (0, 51, 52, 57, 59):
            assert BoardEngine.is_finished(distance) is False


class TestIsLegalMove:
    """Tests for BoardEngine.is_legal_move()."""

    def test_main_track_always_legal(self):
        for distance in range(52):
            for roll in range(1, 7):
                assert BoardEngine.is_legal_move(distance, roll) is True

    def test_lane_moves_never_overshoot(self):
        for distance in range(52, 58):
            for roll in range(1, 7):
                if BoardEngine.is_legal_move(distance, roll):
                    assert distance + roll <= 58

    def test_exact_finish_is_legal(self):
        assert BoardEngine.is_legal_move(57, 1) is True
        assert BoardEngine.is_legal_move(52, 6) is True

    def test_overshoot_is_illegal(self):
        assert BoardEngine.is_legal_move(55, 4) is False

    def test_finished_cannot_move(self):
        assert BoardEngine.is_legal_move(58, 1) is False


class TestAbsolutePosition:
    """Tests for BoardEngine.absolute_position()."""

    def test_on_track(self):
        assert BoardEngine.absolute_position(PlayerColor.YELLOW, 20) == 2

    def test_finish_lane_is_off_track(self):
        assert BoardEngine.absolute_position(PlayerColor.RED, 52) == NO_POSITION
