"""
Reducer - Validates selections and applies exorcisms.

The reducer is the single point of board change.
Live play and replay both go through apply_selection().

Design principles:
- Pure functions: (board, selection) -> result
- Validates before applying
- Invalid selections are a normal negative result, never an error
- Cells outside the grid contribute nothing
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import Board, EMPTY_CELL, TARGET_SUM
from .selection import Selection


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking a selection against a board."""
    is_valid: bool
    sum: int
    tile_count: int


@dataclass(frozen=True)
class ExorcismResult:
    """
    Result of applying a selection.

    Contains:
    - The validation that decided the outcome
    - The board after the attempt (the same object if invalid)
    - Score gained (tile count if valid, 0 otherwise)
    """
    validation: ValidationResult
    board: Board
    score_gained: int

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid


def _clipped_rows(board: Board, selection: Selection) -> range:
    return range(max(selection.start_row, 0), min(selection.end_row, board.rows - 1) + 1)


def _clipped_cols(board: Board, selection: Selection) -> range:
    return range(max(selection.start_col, 0), min(selection.end_col, board.cols - 1) + 1)


def calculate_power_sum(board: Board, selection: Selection) -> int:
    """Sum of ghost powers inside the rectangle; empty cells count 0."""
    total = 0
    for row in _clipped_rows(board, selection):
        cells = board.cells[row]
        for col in _clipped_cols(board, selection):
            power = cells[col].power
            if power is not None:
                total += power
    return total


def count_non_null_cells(board: Board, selection: Selection) -> int:
    """Number of ghosts inside the rectangle."""
    count = 0
    for row in _clipped_rows(board, selection):
        cells = board.cells[row]
        for col in _clipped_cols(board, selection):
            if cells[col].power is not None:
                count += 1
    return count


def validate_selection(board: Board, selection: Selection) -> ValidationResult:
    """A selection is valid iff its ghosts sum to exactly 10."""
    total = calculate_power_sum(board, selection)
    return ValidationResult(
        is_valid=total == TARGET_SUM,
        sum=total,
        tile_count=count_non_null_cells(board, selection),
    )


def _clear(board: Board, selection: Selection) -> Board:
    rows = _clipped_rows(board, selection)
    cols = _clipped_cols(board, selection)
    new_cells = []
    for row_idx, row in enumerate(board.cells):
        if row_idx in rows:
            row = tuple(
                EMPTY_CELL if col_idx in cols else cell
                for col_idx, cell in enumerate(row)
            )
        new_cells.append(row)
    return Board(cells=tuple(new_cells))


def execute_exorcism(board: Board, selection: Selection) -> Board:
    """
    Clear every cell of a valid selection.

    Returns the input board unchanged for an invalid selection.
    Rows untouched by the selection are shared with the input board.
    """
    if not validate_selection(board, selection).is_valid:
        return board
    return _clear(board, selection)


def calculate_score_increment(board: Board, selection: Selection) -> int:
    """Tiles cleared by the selection: tile count if valid, else 0."""
    validation = validate_selection(board, selection)
    return validation.tile_count if validation.is_valid else 0


def apply_selection(board: Board, selection: Selection) -> ExorcismResult:
    """
    Validate and apply a selection in one step.

    Returns ExorcismResult with the new board and the score gained.
    """
    validation = validate_selection(board, selection)
    if not validation.is_valid:
        return ExorcismResult(validation=validation, board=board, score_gained=0)
    return ExorcismResult(
        validation=validation,
        board=_clear(board, selection),
        score_gained=validation.tile_count,
    )
