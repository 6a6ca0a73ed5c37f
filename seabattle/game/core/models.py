"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

SHIP_LENGTHS: tuple[int, ...] = (2, 3, 4, 5)

# Ship counts per length class, ordered like SHIP_LENGTHS.
Inventory = tuple[int, int, int, int]

PRESET_INVENTORIES: dict[int, Inventory] = {
    5: (2, 1, 0, 0),
    10: (1, 2, 1, 1),
}


class Player(StrEnum):
    """Match participant. Player two is the computer in AI modes."""

    ONE = "ONE"
    TWO = "TWO"

    @property
    def opponent(self) -> Player:
        return Player.TWO if self is Player.ONE else Player.ONE


class GameMode(StrEnum):
    """Match mode."""

    VS_PLAYER = "VS_PLAYER"
    VS_AI_EASY = "VS_AI_EASY"
    VS_AI_HARD = "VS_AI_HARD"
    CUSTOM = "CUSTOM"

    @property
    def is_vs_ai(self) -> bool:
        return self in (GameMode.VS_AI_EASY, GameMode.VS_AI_HARD)


class MatchStatus(StrEnum):
    """Match lifecycle state."""

    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"


class Direction(StrEnum):
    """Compass direction used for ship translation and heading."""

    NORTH = "NORTH"
    EAST = "EAST"
    SOUTH = "SOUTH"
    WEST = "WEST"

    @property
    def step(self) -> tuple[int, int]:
        """Return the (dcol, drow) offset of one step in this direction."""
        return _DIRECTION_STEPS[self]

    def turned_right(self) -> Direction:
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 1) % 4]

    def turned_left(self) -> Direction:
        return _CLOCKWISE[(_CLOCKWISE.index(self) - 1) % 4]


_CLOCKWISE: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)

_DIRECTION_STEPS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


class Belief(IntEnum):
    """Opponent knowledge about a single cell."""

    UNKNOWN = 0
    WATER = 1
    SHIP = 2


@dataclass(frozen=True, slots=True)
class Coord:
    """Grid coordinate."""

    col: int
    row: int

    def shifted(self, dcol: int, drow: int) -> Coord:
        return Coord(self.col + dcol, self.row + drow)


def covered_cells(inventory: Inventory) -> int:
    """Return how many cells a full fleet of this inventory occupies."""
    return sum(length * count for length, count in zip(SHIP_LENGTHS, inventory))


def neighbors8(coord: Coord) -> list[Coord]:
    """Return the eight surrounding coordinates, unbounded."""
    return [
        coord.shifted(dcol, drow)
        for drow in (-1, 0, 1)
        for dcol in (-1, 0, 1)
        if dcol or drow
    ]
