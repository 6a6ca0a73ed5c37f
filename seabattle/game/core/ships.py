"""Ships and the per-grid ship collection."""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass

import numpy as np

from seabattle.game.core.models import (
    SHIP_LENGTHS,
    Coord,
    Direction,
    Inventory,
    neighbors8,
)

logger = logging.getLogger(__name__)

_FLEET_ATTEMPTS = 400


@dataclass(slots=True)
class Ship:
    """A straight run of cells starting at the bow and extending along the heading."""

    length: int
    bow: Coord
    heading: Direction = Direction.EAST

    def cells(self) -> list[Coord]:
        """Return the occupied cells, bow first."""
        dcol, drow = self.heading.step
        return [self.bow.shifted(dcol * i, drow * i) for i in range(self.length)]

    def occupies(self, coord: Coord) -> bool:
        return coord in self.cells()

    def move(self, direction: Direction) -> None:
        """Translate the ship one cell. Bounds are checked by the collection."""
        dcol, drow = direction.step
        self.bow = self.bow.shifted(dcol, drow)

    def turn_right(self) -> None:
        """Rotate the ship clockwise around its bow."""
        self.heading = self.heading.turned_right()

    def turn_left(self) -> None:
        """Rotate the ship counter-clockwise around its bow."""
        self.heading = self.heading.turned_left()

    def is_destroyed(self, hits: np.ndarray) -> bool:
        size = hits.shape[0]
        for cell in self.cells():
            if not (0 <= cell.col < size and 0 <= cell.row < size):
                return False
            if not hits[cell.row, cell.col]:
                return False
        return True


class ShipSet:
    """Ships placed on one grid plus placement and destruction rules.

    Hit state lives in the owning grid; the collection keeps a reference to
    the grid's hit array so destruction can be answered without arguments.
    """

    def __init__(self, size: int, inventory: Inventory, hits: np.ndarray) -> None:
        self._size = size
        self._inventory = inventory
        self._hits = hits
        self._ships: list[Ship] = []

    @property
    def inventory(self) -> Inventory:
        return self._inventory

    @property
    def ships(self) -> list[Ship]:
        return list(self._ships)

    def add_ship(self, ship: Ship) -> None:
        """Add a ship without validating it; see placement_legit()."""
        self._ships.append(ship)

    def clear(self) -> None:
        self._ships.clear()

    def place_ships_randomly(self, rng: random.Random) -> None:
        """Replace all ships with a random legal placement of the inventory.

        Fleets where no two ships touch are preferred. Dense inventories that
        leave no room for gaps fall back to ships lying side by side.
        """
        lengths = self._fleet_lengths()
        for _ in range(_FLEET_ATTEMPTS):
            generated = _generate_fleet(rng, self._size, lengths, allow_contact=False)
            if generated is not None:
                self._ships = generated
                return
        logger.warning(
            "non_touching_placement_failed size=%d inventory=%s", self._size, self._inventory
        )
        for _ in range(_FLEET_ATTEMPTS):
            generated = _generate_fleet(rng, self._size, lengths, allow_contact=True)
            if generated is not None:
                self._ships = generated
                return
        raise RuntimeError("Failed to generate random fleet placement.")

    def placement_legit(self) -> bool:
        """Return whether the ships match the inventory, fit, and do not overlap."""
        counts = Counter(ship.length for ship in self._ships)
        expected = Counter(dict(zip(SHIP_LENGTHS, self._inventory)))
        if +counts != +expected:
            return False

        covered = np.zeros((self._size, self._size), dtype=bool)
        for ship in self._ships:
            for cell in ship.cells():
                if not self._in_bounds(cell) or covered[cell.row, cell.col]:
                    return False
                covered[cell.row, cell.col] = True
        return True

    def has_contact(self) -> bool:
        """Return whether two ships touch, diagonals included."""
        owners = np.zeros((self._size, self._size), dtype=np.int16)
        for ship_id, ship in enumerate(self._ships, start=1):
            for cell in ship.cells():
                if self._in_bounds(cell):
                    owners[cell.row, cell.col] = ship_id
        for ship_id, ship in enumerate(self._ships, start=1):
            for cell in ship.cells():
                for neighbor in neighbors8(cell):
                    if self._in_bounds(neighbor) and owners[neighbor.row, neighbor.col] not in (0, ship_id):
                        return True
        return False

    def ships_on_cell(self, coord: Coord) -> int:
        """Return how many ships cover the cell (more than one means overlap)."""
        return sum(1 for ship in self._ships if ship.occupies(coord))

    def find_ship_containing_cell(self, coord: Coord) -> Ship | None:
        for ship in self._ships:
            if ship.occupies(coord):
                return ship
        return None

    def all_ships_destroyed(self) -> bool:
        """Return whether every ship has all of its cells hit."""
        return all(ship.is_destroyed(self._hits) for ship in self._ships)

    def _fleet_lengths(self) -> list[int]:
        lengths: list[int] = []
        for length, count in zip(SHIP_LENGTHS, self._inventory):
            lengths.extend([length] * count)
        # Longest first, they have the fewest legal spots.
        return sorted(lengths, reverse=True)

    def _in_bounds(self, coord: Coord) -> bool:
        return 0 <= coord.col < self._size and 0 <= coord.row < self._size


def _generate_fleet(
    rng: random.Random, size: int, lengths: list[int], *, allow_contact: bool
) -> list[Ship] | None:
    blocked = np.zeros((size, size), dtype=bool)
    ships: list[Ship] = []
    for length in lengths:
        candidates = _candidate_ships(length, blocked)
        if not candidates:
            return None
        ship = rng.choice(candidates)
        ships.append(ship)
        for cell in ship.cells():
            if allow_contact:
                blocked[cell.row, cell.col] = True
            else:
                blocked[max(cell.row - 1, 0) : cell.row + 2, max(cell.col - 1, 0) : cell.col + 2] = True
    return ships


def _candidate_ships(length: int, blocked: np.ndarray) -> list[Ship]:
    """Return every ship of the given length whose cells are all unblocked."""
    free = (~blocked).astype(np.int32)
    # Window sums over prefix sums; a full window means every cell is free.
    along_rows = np.pad(np.cumsum(free, axis=1), ((0, 0), (1, 0)))
    east = (along_rows[:, length:] - along_rows[:, :-length]) == length
    along_cols = np.pad(np.cumsum(free, axis=0), ((1, 0), (0, 0)))
    south = (along_cols[length:, :] - along_cols[:-length, :]) == length

    candidates = [
        Ship(length=length, bow=Coord(int(col), int(row)), heading=Direction.EAST)
        for row, col in np.argwhere(east)
    ]
    candidates.extend(
        Ship(length=length, bow=Coord(int(col), int(row)), heading=Direction.SOUTH)
        for row, col in np.argwhere(south)
    )
    return candidates
