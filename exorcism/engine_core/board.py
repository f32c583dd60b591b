"""
Board Generator - Builds the initial grid from a seed.

Cells are drawn in row-major order (left to right, top to bottom),
one PRNG value per cell. The order is fixed: changing it changes which
seed produces which board and breaks replay of every stored session.
"""

from __future__ import annotations
import math

from .prng import create_seeded_random, generate_seed
from .state import Board, Cell, BOARD_ROWS, BOARD_COLS, MIN_POWER, MAX_POWER

POWER_SPAN = MAX_POWER - MIN_POWER + 1


def create_board_from_seed(
    seed: int,
    rows: int = BOARD_ROWS,
    cols: int = BOARD_COLS,
) -> Board:
    """Create a board deterministically from a seed."""
    random = create_seeded_random(seed)
    return Board(cells=tuple(
        tuple(
            Cell(math.floor(random() * POWER_SPAN) + MIN_POWER)
            for _ in range(cols)
        )
        for _ in range(rows)
    ))


def create_initial_board(
    rows: int = BOARD_ROWS,
    cols: int = BOARD_COLS,
) -> tuple[Board, int]:
    """
    Create a board from a fresh random seed.

    Returns (board, seed). The seed is all that needs to be persisted
    to rebuild this board later.
    """
    seed = generate_seed()
    return create_board_from_seed(seed, rows, cols), seed
