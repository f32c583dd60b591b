"""
Pytest fixtures for Exorcism tests.
"""

import random

import pytest

from ..engine_core.board import create_board_from_seed
from ..engine_core.selection import Selection, calculate_selection_bounds
from ..engine_core.state import Board, BOARD_ROWS, BOARD_COLS


# Seeds used by the property-style tests: edge values plus a fixed random spread
PROPERTY_SEEDS = [0, 1, 42, 12345, 0x7FFFFFFF, 0xFFFFFFFF] + random.Random(2024).sample(
    range(0, 0x100000000), 24
)


def random_selection(rng: random.Random, rows: int = BOARD_ROWS, cols: int = BOARD_COLS) -> Selection:
    """A normalized selection with both corners inside the grid."""
    return calculate_selection_bounds(
        rng.randrange(rows), rng.randrange(cols), rng.randrange(rows), rng.randrange(cols),
    )


def random_sparse_board(rng: random.Random, rows: int = 4, cols: int = 5, empty_ratio: float = 0.5) -> Board:
    """A small board with a mix of ghosts and empty cells."""
    return Board.from_powers(
        [None if rng.random() < empty_ratio else rng.randint(1, 9) for _ in range(cols)]
        for _ in range(rows)
    )


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def seeded_board() -> Board:
    """Board for seed 12345."""
    return create_board_from_seed(12345)


@pytest.fixture
def small_board() -> Board:
    """
    Hand-built 3x4 board.

        1 9 . 5
        2 . 8 5
        3 3 4 9
    """
    return Board.from_powers([
        [1, 9, None, 5],
        [2, None, 8, 5],
        [3, 3, 4, 9],
    ])


@pytest.fixture
def stuck_board() -> Board:
    """Board with ghosts but no rectangle summing to 10."""
    return Board.from_powers([
        [9, 9, 9],
        [9, 9, 9],
    ])
