"""
Selection Geometry - Canonical rectangles over the grid.

A drag gesture yields two arbitrary corners; calculate_selection_bounds
is the single constructor turning them into a normalized Selection.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Selection:
    """
    An inclusive rectangle with start_row <= end_row and start_col <= end_col.

    Coordinates are not clipped to any board; cells outside the grid
    simply hold no ghost.
    """
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    def __post_init__(self):
        if self.start_row > self.end_row or self.start_col > self.end_col:
            raise ValueError(
                "Selection is not normalized; build it with calculate_selection_bounds()"
            )

    @property
    def height(self) -> int:
        return self.end_row - self.start_row + 1

    @property
    def width(self) -> int:
        return self.end_col - self.start_col + 1

    @property
    def area(self) -> int:
        return self.height * self.width

    def contains(self, row: int, col: int) -> bool:
        return (
            self.start_row <= row <= self.end_row
            and self.start_col <= col <= self.end_col
        )

    def cells(self) -> Iterator[tuple[int, int]]:
        """Iterate (row, col) pairs in row-major order."""
        for row in range(self.start_row, self.end_row + 1):
            for col in range(self.start_col, self.end_col + 1):
                yield row, col

    def as_tuple(self) -> tuple[int, int, int, int]:
        return self.start_row, self.start_col, self.end_row, self.end_col


def calculate_selection_bounds(
    start_row: int,
    start_col: int,
    end_row: int,
    end_col: int,
) -> Selection:
    """Normalize two corners so the start is the top-left one."""
    return Selection(
        start_row=min(start_row, end_row),
        start_col=min(start_col, end_col),
        end_row=max(start_row, end_row),
        end_col=max(start_col, end_col),
    )
