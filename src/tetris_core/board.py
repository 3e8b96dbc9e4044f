"""Board representation for the Tetris playfield."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Union

import numpy as np
from numpy.typing import NDArray


# Dimensions of the standard Tetris board.
LINES = 20
COLUMNS = 10

Coordinate = Union[int, float]
Mask = NDArray[np.bool_]


@dataclass(frozen=True)
class Cell:
    """Single square of the playfield or of a shape.

    Cells are immutable: placing a block on the board replaces the cell rather
    than changing its colour.  Shapes reuse the same type for their relative
    offsets, which is why the coordinates may be fractional.
    """

    line: Coordinate
    column: Coordinate
    color: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.color


Row = List[Cell]


def create_empty_row(line: int, columns: int = COLUMNS) -> Row:
    """Return a row of empty cells tagged with ``line``."""

    return [Cell(line, column) for column in range(columns)]


def create_board(lines: int = LINES, columns: int = COLUMNS) -> List[Row]:
    """Return a new grid of empty cells, each tagged with its coordinates."""

    return [create_empty_row(line, columns) for line in range(lines)]


class Board:
    """Tetris board holding one :class:`Cell` per square."""

    lines: int = LINES
    columns: int = COLUMNS

    def __init__(self) -> None:
        self.cells: List[Row] = create_board(self.lines, self.columns)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.cells)

    def in_bounds(self, line: int, column: int) -> bool:
        return 0 <= line < self.lines and 0 <= column < self.columns

    def get_cell(self, line: int, column: int) -> Cell:
        """Safely return the cell at ``(line, column)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(line, column):
            return self.cells[line][column]
        raise IndexError("Cell out of bounds")

    def set_cell(self, line: int, column: int, color: str) -> None:
        """Replace the cell at ``(line, column)`` with one of ``color``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(line, column):
            self.cells[line][column] = Cell(line, column, color)
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, line: int, column: int) -> bool:
        """Return ``True`` if the cell at ``(line, column)`` is empty.

        Any coordinates outside the board are treated as occupied.
        """

        if self.in_bounds(line, column):
            return self.cells[line][column].is_empty
        return False

    def occupancy(self) -> Mask:
        """Return a boolean mask of occupied cells, shaped ``(lines, columns)``."""

        return np.array(
            [[not cell.is_empty for cell in row] for row in self.cells],
            dtype=np.bool_,
        )

    def full_lines(self) -> List[int]:
        """Return the indices of every completely occupied line."""

        full = np.all(self.occupancy(), axis=1)
        return [int(line) for line in np.flatnonzero(full)]

    def remove_lines(self, indices: List[int]) -> int:
        """Remove ``indices`` and collapse the rows above them.

        The indices refer to the board as it is before the call, so removing
        several lines never re-examines rows shifted down by an earlier
        removal.  Fresh empty rows are inserted at the top and every surviving
        cell is re-tagged with its new line.  Returns how many lines went.
        """

        doomed = set(indices)
        if not doomed:
            return 0
        remaining = [row for line, row in enumerate(self.cells) if line not in doomed]
        cleared = self.lines - len(remaining)
        rows = [create_empty_row(0, self.columns) for _ in range(cleared)] + remaining
        self.cells[:] = [
            [Cell(line, cell.column, cell.color) for cell in row]
            for line, row in enumerate(rows)
        ]
        return cleared
