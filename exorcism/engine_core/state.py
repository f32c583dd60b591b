"""
Board State - Immutable grid of ghost cells.

Design principles:
- Immutable: a Board is never changed in place, every mutation returns a new Board
- Value-typed: two boards with the same cells compare equal
- Total: reading outside the grid yields "no ghost" instead of raising
- Serializable: converts to and from nested lists of powers
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence


# Shipped game dimensions (10 rows x 17 columns)
BOARD_ROWS = 10
BOARD_COLS = 17

# Ghost power range and the exact sum that exorcises a selection
MIN_POWER = 1
MAX_POWER = 9
TARGET_SUM = 10


@dataclass(frozen=True)
class Cell:
    """
    A single grid position.

    power is 1-9 for a ghost, None once the ghost has been exorcised.
    """
    power: int | None = None

    def __post_init__(self):
        if self.power is not None and not MIN_POWER <= self.power <= MAX_POWER:
            raise ValueError(
                f"Cell power must be in [{MIN_POWER}, {MAX_POWER}] or None, got {self.power}"
            )

    @property
    def is_empty(self) -> bool:
        return self.power is None


EMPTY_CELL = Cell()


@dataclass(frozen=True)
class Board:
    """
    Complete grid for one round.

    Cells are stored row-major as a tuple of row tuples, so a Board
    can be shared freely between the live game, replay and the API
    without copying.
    """
    cells: tuple[tuple[Cell, ...], ...]

    def __post_init__(self):
        if not self.cells:
            raise ValueError("Board must have at least one row")
        width = len(self.cells[0])
        if width == 0:
            raise ValueError("Board must have at least one column")
        for row in self.cells:
            if len(row) != width:
                raise ValueError("All board rows must have the same length")

    @classmethod
    def from_powers(cls, powers: Iterable[Sequence[int | None]]) -> Board:
        """Build a board from nested rows of powers (None for empty cells)."""
        return cls(cells=tuple(
            tuple(Cell(power) for power in row)
            for row in powers
        ))

    @classmethod
    def empty(cls, rows: int = BOARD_ROWS, cols: int = BOARD_COLS) -> Board:
        """A board with every ghost already exorcised."""
        return cls(cells=tuple((EMPTY_CELL,) * cols for _ in range(rows)))

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    @property
    def remaining(self) -> int:
        """Number of ghosts still on the board."""
        return sum(1 for row in self.cells for cell in row if not cell.is_empty)

    @property
    def is_empty(self) -> bool:
        return self.remaining == 0

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        """Get a cell, treating out-of-range coordinates as empty."""
        if not self.in_bounds(row, col):
            return EMPTY_CELL
        return self.cells[row][col]

    def power(self, row: int, col: int) -> int | None:
        return self.cell(row, col).power

    def to_powers(self) -> list[list[int | None]]:
        """Nested lists of powers, row-major."""
        return [[cell.power for cell in row] for row in self.cells]

    def __iter__(self) -> Iterator[tuple[Cell, ...]]:
        return iter(self.cells)

    def __str__(self) -> str:
        return "\n".join(
            " ".join("." if cell.is_empty else str(cell.power) for cell in row)
            for row in self.cells
        )
