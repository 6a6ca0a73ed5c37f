"""Grid state representation and cell accessors."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from seabattle.game.core.errors import CellOutOfBoundsError
from seabattle.game.core.models import Coord, Inventory
from seabattle.game.core.ships import ShipSet


class GameGrid:
    """Numpy-backed hit state plus the ship collection of one player."""

    def __init__(self, size: int, inventory: Inventory) -> None:
        self.size = size
        self.hits = np.zeros((size, size), dtype=np.bool_)
        self.ship_set = ShipSet(size, inventory, self.hits)

    def in_bounds(self, col: int, row: int) -> bool:
        """Return whether the coordinate is in grid bounds."""
        return 0 <= col < self.size and 0 <= row < self.size

    def cell(self, col: int, row: int) -> GridCell:
        if not self.in_bounds(col, row):
            raise CellOutOfBoundsError(f"Cell ({col}, {row}) is outside a {self.size}x{self.size} grid.")
        return GridCell(self, col, row)

    def hit_coords(self) -> list[Coord]:
        """Return every attacked coordinate in row-major order."""
        rows, cols = np.nonzero(self.hits)
        return [Coord(int(col), int(row)) for row, col in zip(rows, cols)]

    def hit_count(self) -> int:
        return int(self.hits.sum())


@dataclass(frozen=True, slots=True)
class GridCell:
    """View of a single grid cell."""

    grid: GameGrid
    col: int
    row: int

    @property
    def coord(self) -> Coord:
        return Coord(self.col, self.row)

    def is_hit(self) -> bool:
        return bool(self.grid.hits[self.row, self.col])

    def set_hit(self, hit: bool = True) -> None:
        """Mark the cell attacked. Hits are permanent."""
        if not hit:
            if self.is_hit():
                raise ValueError(f"Cell ({self.col}, {self.row}) cannot be unmarked.")
            return
        self.grid.hits[self.row, self.col] = True

    def is_ship(self) -> bool:
        return self.grid.ship_set.ships_on_cell(self.coord) > 0
