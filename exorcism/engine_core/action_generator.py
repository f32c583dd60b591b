"""
Action Generator - Finds the selections that would exorcise ghosts.

The generator is used by:
1. The game loop, to end the round when no play remains
2. Bots, to enumerate possible moves
3. The API, to offer hints

Scan order: top-left corner row-major, then end_row, then end_col.
For a fixed top-left corner and end_row, the sum never decreases as
end_col grows (powers are >= 0, empty cells count 0), so the scan stops
growing end_col once the running sum passes the target. When even the
one-column rectangle passes the target, taller rectangles do as well.
These cut-offs never change the answer relative to enumerating every
rectangle.
"""

from __future__ import annotations

from .state import Board, TARGET_SUM
from .selection import Selection


def _prefix_sums(board: Board) -> list[list[int]]:
    """2D prefix table: table[r][c] is the sum of rows < r and cols < c."""
    table = [[0] * (board.cols + 1) for _ in range(board.rows + 1)]
    for r, row in enumerate(board.cells):
        running = 0
        for c, cell in enumerate(row):
            running += cell.power or 0
            table[r + 1][c + 1] = table[r][c + 1] + running
    return table


def _scan(board: Board, limit: int | None) -> list[Selection]:
    table = _prefix_sums(board)
    found: list[Selection] = []
    rows, cols = board.rows, board.cols

    for start_row in range(rows):
        for start_col in range(cols):
            for end_row in range(start_row, rows):
                top = table[start_row]
                bottom = table[end_row + 1]
                base = bottom[start_col] - top[start_col]
                for end_col in range(start_col, cols):
                    total = bottom[end_col + 1] - top[end_col + 1] - base
                    if total == TARGET_SUM:
                        found.append(Selection(start_row, start_col, end_row, end_col))
                        if limit is not None and len(found) >= limit:
                            return found
                    elif total > TARGET_SUM:
                        break
                if bottom[start_col + 1] - top[start_col + 1] - base > TARGET_SUM:
                    break
    return found


def find_valid_moves(board: Board, limit: int | None = None) -> list[Selection]:
    """
    List selections summing to exactly 10, in scan order.

    Args:
        board: Board to scan
        limit: Stop after this many selections (None for all)
    """
    if limit is not None and limit <= 0:
        return []
    return _scan(board, limit)


def find_first_valid_move(board: Board) -> Selection | None:
    """First valid selection in scan order, or None if the board is stuck."""
    moves = _scan(board, limit=1)
    return moves[0] if moves else None


def has_valid_moves(board: Board) -> bool:
    """True iff at least one rectangle sums to exactly 10."""
    return find_first_valid_move(board) is not None
