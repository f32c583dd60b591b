"""
Tests for the reducer (validation and exorcism).

Tests:
- Sum and count correctness, including empty and out-of-range cells
- Exact-10 validity rule
- Exorcism clears exactly the selection
- Invalid exorcism is a no-op
- Inputs are never mutated
"""

import random

import pytest

from ..engine_core.board import create_board_from_seed
from ..engine_core.reducer import (
    calculate_power_sum,
    count_non_null_cells,
    validate_selection,
    execute_exorcism,
    calculate_score_increment,
    apply_selection,
)
from ..engine_core.selection import Selection, calculate_selection_bounds
from ..engine_core.state import Board
from .conftest import PROPERTY_SEEDS, random_selection, random_sparse_board


def manual_sum(board, selection):
    total = 0
    for r in range(board.rows):
        for c in range(board.cols):
            if selection.contains(r, c) and board.cells[r][c].power is not None:
                total += board.cells[r][c].power
    return total


def manual_count(board, selection):
    return sum(
        1
        for r in range(board.rows)
        for c in range(board.cols)
        if selection.contains(r, c) and board.cells[r][c].power is not None
    )


class TestPowerSum:
    """Tests for calculate_power_sum and count_non_null_cells."""

    def test_small_board_sums(self, small_board):
        assert calculate_power_sum(small_board, Selection(0, 0, 0, 1)) == 10
        assert calculate_power_sum(small_board, Selection(0, 0, 2, 3)) == 49
        assert calculate_power_sum(small_board, Selection(0, 2, 0, 2)) == 0

    def test_small_board_counts(self, small_board):
        assert count_non_null_cells(small_board, Selection(0, 0, 2, 3)) == 10
        assert count_non_null_cells(small_board, Selection(0, 1, 1, 2)) == 2
        assert count_non_null_cells(small_board, Selection(0, 2, 0, 2)) == 0

    def test_out_of_range_contributes_nothing(self, small_board):
        """Cells outside the grid add neither power nor count."""
        far = Selection(10, 10, 20, 20)
        assert calculate_power_sum(small_board, far) == 0
        assert count_non_null_cells(small_board, far) == 0

        partial = calculate_selection_bounds(-5, -5, 0, 1)
        assert calculate_power_sum(small_board, partial) == 10
        assert count_non_null_cells(small_board, partial) == 2

    @pytest.mark.parametrize("seed", PROPERTY_SEEDS[:10])
    def test_matches_manual_sum_on_seeded_boards(self, seed):
        board = create_board_from_seed(seed)
        rng = random.Random(seed)
        for _ in range(100):
            selection = random_selection(rng)
            assert calculate_power_sum(board, selection) == manual_sum(board, selection)
            assert count_non_null_cells(board, selection) == manual_count(board, selection)

    def test_matches_manual_sum_on_sparse_boards(self):
        rng = random.Random(5)
        for _ in range(100):
            board = random_sparse_board(rng)
            selection = random_selection(rng, board.rows, board.cols)
            assert calculate_power_sum(board, selection) == manual_sum(board, selection)
            assert count_non_null_cells(board, selection) == manual_count(board, selection)


class TestValidateSelection:
    """Tests for the exact-10 rule."""

    def test_sum_of_ten_is_valid(self, small_board):
        result = validate_selection(small_board, Selection(0, 0, 0, 1))
        assert result.is_valid
        assert result.sum == 10
        assert result.tile_count == 2

    def test_empty_cells_inside_are_ignored(self, small_board):
        """2 . 8 sums to 10 with two ghosts."""
        result = validate_selection(small_board, Selection(1, 0, 1, 2))
        assert result.is_valid
        assert result.tile_count == 2

    def test_nine_and_eleven_are_invalid(self):
        board = Board.from_powers([[4, 5, 2]])
        assert validate_selection(board, Selection(0, 0, 0, 1)).sum == 9
        assert not validate_selection(board, Selection(0, 0, 0, 1)).is_valid
        assert validate_selection(board, Selection(0, 0, 0, 2)).sum == 11
        assert not validate_selection(board, Selection(0, 0, 0, 2)).is_valid

    def test_out_of_range_selection_is_invalid(self, small_board):
        result = validate_selection(small_board, Selection(50, 50, 60, 60))
        assert result.sum == 0
        assert result.tile_count == 0
        assert not result.is_valid

    def test_validity_iff_sum_ten(self):
        rng = random.Random(8)
        for _ in range(300):
            board = random_sparse_board(rng, empty_ratio=rng.random())
            selection = random_selection(rng, board.rows, board.cols)
            result = validate_selection(board, selection)
            assert result.is_valid == (result.sum == 10)
            assert result.sum == manual_sum(board, selection)


class TestExecuteExorcism:
    """Tests for clearing valid selections."""

    def test_clears_valid_selection(self, small_board):
        new_board = execute_exorcism(small_board, Selection(0, 0, 0, 1))
        assert new_board.power(0, 0) is None
        assert new_board.power(0, 1) is None
        assert new_board.power(0, 3) == 5
        assert new_board.remaining == small_board.remaining - 2

    def test_input_not_mutated(self, small_board):
        before = small_board.to_powers()
        execute_exorcism(small_board, Selection(0, 0, 0, 1))
        assert small_board.to_powers() == before

    def test_invalid_returns_same_board(self, small_board):
        selection = Selection(0, 0, 1, 1)
        assert not validate_selection(small_board, selection).is_valid
        assert execute_exorcism(small_board, selection) is small_board

    def test_partially_out_of_range_valid_selection(self, small_board):
        """Only in-grid cells are cleared; shape is kept."""
        selection = calculate_selection_bounds(-2, -2, 0, 1)
        new_board = execute_exorcism(small_board, selection)
        assert (new_board.rows, new_board.cols) == (small_board.rows, small_board.cols)
        assert new_board.power(0, 0) is None
        assert new_board.power(0, 1) is None
        assert new_board.remaining == small_board.remaining - 2

    def test_exorcism_properties_on_random_boards(self):
        """
        For valid selections: inside cleared, outside identical,
        nothing revived. For invalid ones: identical board.
        """
        rng = random.Random(21)
        checked_valid = 0
        for _ in range(2000):
            board = random_sparse_board(rng, rows=3, cols=4, empty_ratio=0.3)
            selection = random_selection(rng, board.rows, board.cols)
            valid = validate_selection(board, selection).is_valid
            new_board = execute_exorcism(board, selection)

            for r in range(board.rows):
                for c in range(board.cols):
                    before = board.cells[r][c]
                    after = new_board.cells[r][c]
                    if before.is_empty:
                        assert after.is_empty
                    if valid and selection.contains(r, c):
                        assert after.is_empty
                    else:
                        assert after == before
            checked_valid += valid
        assert checked_valid > 0

    def test_unchanged_rows_are_shared(self, small_board):
        new_board = execute_exorcism(small_board, Selection(0, 0, 0, 1))
        assert new_board.cells[1] is small_board.cells[1]
        assert new_board.cells[2] is small_board.cells[2]


class TestScoreIncrement:
    """Tests for score calculation."""

    def test_valid_scores_tile_count(self, small_board):
        assert calculate_score_increment(small_board, Selection(2, 0, 2, 2)) == 3

    def test_invalid_scores_zero(self, small_board):
        assert calculate_score_increment(small_board, Selection(0, 0, 2, 3)) == 0

    def test_increment_positive_iff_valid(self):
        rng = random.Random(3)
        for _ in range(500):
            board = random_sparse_board(rng, rows=3, cols=3, empty_ratio=0.3)
            selection = random_selection(rng, board.rows, board.cols)
            validation = validate_selection(board, selection)
            increment = calculate_score_increment(board, selection)
            if validation.is_valid:
                assert increment == count_non_null_cells(board, selection)
                assert increment > 0
            else:
                assert increment == 0


class TestApplySelection:
    """Tests for the combined apply_selection step."""

    def test_valid(self, small_board):
        result = apply_selection(small_board, Selection(0, 3, 1, 3))
        assert result.is_valid
        assert result.score_gained == 2
        assert result.board == execute_exorcism(small_board, Selection(0, 3, 1, 3))

    def test_invalid(self, small_board):
        result = apply_selection(small_board, Selection(0, 0, 0, 0))
        assert not result.is_valid
        assert result.score_gained == 0
        assert result.board is small_board
