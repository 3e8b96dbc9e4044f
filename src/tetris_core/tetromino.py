"""Falling shapes and the factory that deals them.

A :class:`Shape` is a centre position plus a list of cells relative to that
centre.  Pieces whose visual centre lies between two squares (``I`` and ``O``)
use half-integer offsets so that a quarter turn around the centre maps squares
onto squares without any wall-kick correction.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple, TypeVar

from .board import Cell, Coordinate

T = TypeVar("T")

Offset = Tuple[Coordinate, Coordinate]


def _integral(value: Coordinate) -> bool:
    return float(value).is_integer()


@dataclass
class Shape:
    """Active falling piece in the game."""

    center_line: Coordinate
    center_column: Coordinate
    cells: List[Cell] = field(default_factory=list)
    name: str = ""

    def absolute_cells(self, origin_line: int = 0, origin_column: int = 0) -> List[Cell]:
        """Return the shape's cells translated to board coordinates.

        Cells that would land above the first line are left out; a freshly
        spawned piece may poke out of the top of the board and drops into view
        one line at a time.
        """

        result = []
        for cell in self.cells:
            line = int(self.center_line + cell.line + origin_line)
            if line < 0:
                continue
            column = int(self.center_column + cell.column + origin_column)
            result.append(Cell(line, column, cell.color))
        return result

    def move(self, d_line: int, d_column: int) -> None:
        """Shift the centre by ``d_line`` lines and ``d_column`` columns."""

        self.center_line += d_line
        self.center_column += d_column

    def rotate(self) -> None:
        """Turn the piece a quarter turn about its centre."""

        self.cells[:] = [Cell(c.column, -c.line, c.color) for c in self.cells]

    def undo_rotate(self) -> None:
        """Exact inverse of :meth:`rotate`."""

        self.cells[:] = [Cell(-c.column, c.line, c.color) for c in self.cells]


@dataclass(frozen=True)
class ShapeTemplate:
    """Catalog entry from which fresh :class:`Shape` instances are built."""

    name: str
    color: str
    center: Offset
    offsets: Tuple[Offset, ...]

    def __post_init__(self) -> None:
        if not self.color:
            raise ValueError(f"Template {self.name!r} has no color")
        if not self.offsets:
            raise ValueError(f"Template {self.name!r} has no cells")
        if len(set(self.offsets)) != len(self.offsets):
            raise ValueError(f"Template {self.name!r} has duplicate cells")
        center_line, center_column = self.center
        for line, column in self.offsets:
            if not (_integral(center_line + line) and _integral(center_column + column)):
                raise ValueError(
                    f"Template {self.name!r} places cell {(line, column)} between squares"
                )

    def build(self) -> Shape:
        """Return a new shape owning its own list of cells."""

        line, column = self.center
        cells = [Cell(dl, dc, self.color) for dl, dc in self.offsets]
        return Shape(line, column, cells, self.name)


# Classic tetrominoes in their spawn orientation, centred on the top of the
# board.  Cells with a negative line start hidden above the playfield.
CATALOG: Tuple[ShapeTemplate, ...] = (
    ShapeTemplate(
        "I", "#00ffff", (-0.5, 4.5),
        ((0.5, -1.5), (0.5, -0.5), (0.5, 0.5), (0.5, 1.5)),
    ),
    ShapeTemplate(
        "O", "#ffff00", (-0.5, 4.5),
        ((-0.5, -0.5), (-0.5, 0.5), (0.5, -0.5), (0.5, 0.5)),
    ),
    ShapeTemplate("T", "#800080", (0, 4), ((0, -1), (0, 0), (0, 1), (-1, 0))),
    ShapeTemplate("S", "#00ff00", (0, 4), ((0, -1), (0, 0), (-1, 0), (-1, 1))),
    ShapeTemplate("Z", "#ff0000", (0, 4), ((-1, -1), (-1, 0), (0, 0), (0, 1))),
    ShapeTemplate("J", "#0000ff", (0, 4), ((-1, -1), (0, -1), (0, 0), (0, 1))),
    ShapeTemplate("L", "#ffa500", (0, 4), ((-1, 1), (0, -1), (0, 0), (0, 1))),
)


class RandomSource(Protocol):
    """Anything with a ``random.Random``-style ``choice`` method."""

    def choice(self, seq: Sequence[T]) -> T: ...


class ShapeFactory:
    """Deal random shapes from a fixed catalog."""

    def __init__(
        self,
        catalog: Sequence[ShapeTemplate] = CATALOG,
        *,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
    ) -> None:
        if not catalog:
            raise ValueError("Shape catalog is empty")
        self.catalog: Tuple[ShapeTemplate, ...] = tuple(catalog)
        self._rng: RandomSource = rng if rng is not None else random.Random(seed)

    def create_random_shape(self) -> Shape:
        """Return a fresh shape picked uniformly from the catalog."""

        return self._rng.choice(self.catalog).build()
