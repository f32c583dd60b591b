"""
Tests for selection geometry.
"""

import random

import pytest

from ..engine_core.selection import Selection, calculate_selection_bounds


class TestCalculateSelectionBounds:
    """Tests for normalizing drag corners."""

    def test_already_normalized(self):
        assert calculate_selection_bounds(1, 2, 3, 4) == Selection(1, 2, 3, 4)

    def test_inverted_both_axes(self):
        assert calculate_selection_bounds(5, 7, 2, 3) == Selection(2, 3, 5, 7)

    def test_inverted_one_axis(self):
        assert calculate_selection_bounds(0, 9, 4, 1) == Selection(0, 1, 4, 9)

    def test_single_cell(self):
        selection = calculate_selection_bounds(3, 3, 3, 3)
        assert selection.area == 1
        assert list(selection.cells()) == [(3, 3)]

    def test_properties_over_random_corners(self):
        """Normalized, contains both corners, idempotent."""
        rng = random.Random(11)
        for _ in range(500):
            r1, c1, r2, c2 = (rng.randint(-3, 20) for _ in range(4))
            selection = calculate_selection_bounds(r1, c1, r2, c2)

            assert selection.start_row <= selection.end_row
            assert selection.start_col <= selection.end_col
            assert selection.contains(r1, c1)
            assert selection.contains(r2, c2)
            assert calculate_selection_bounds(*selection.as_tuple()) == selection


class TestSelection:
    """Tests for the Selection value type."""

    def test_rejects_inverted_construction(self):
        with pytest.raises(ValueError):
            Selection(3, 0, 1, 0)
        with pytest.raises(ValueError):
            Selection(0, 5, 0, 4)

    def test_dimensions(self):
        selection = Selection(1, 2, 3, 6)
        assert selection.height == 3
        assert selection.width == 5
        assert selection.area == 15

    def test_cells_row_major(self):
        assert list(Selection(0, 0, 1, 1).cells()) == [(0, 0), (0, 1), (1, 0), (1, 1)]

    def test_contains_is_inclusive(self):
        selection = Selection(1, 1, 2, 2)
        assert selection.contains(1, 1)
        assert selection.contains(2, 2)
        assert not selection.contains(0, 1)
        assert not selection.contains(2, 3)
