"""Opponent strategy contract: belief map and the multi-shot turn loop."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import numpy as np

from seabattle.game.core.models import Belief, Coord, GameMode, Player

if TYPE_CHECKING:
    from seabattle.game.core.match import Match

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Shot:
    """One attack made by the opponent and its outcome."""

    coord: Coord
    hit: bool


class OpponentStrategy(ABC):
    """Computer player attacking player one's grid from partial information.

    The strategy only ever sees hit/miss outcomes. Its belief map moves a cell
    from UNKNOWN to WATER or SHIP exactly once. The match is passed in on
    every turn instead of being held by the strategy.
    """

    mode: ClassVar[GameMode]
    player: ClassVar[Player] = Player.TWO

    def __init__(self, grid_size: int, rng: random.Random) -> None:
        self._size = grid_size
        self._rng = rng
        self._beliefs = np.full((grid_size, grid_size), int(Belief.UNKNOWN), dtype=np.int8)
        self._candidates: list[Coord] = []
        self._has_won = False

    @property
    def grid_size(self) -> int:
        return self._size

    @property
    def has_won(self) -> bool:
        return self._has_won

    @property
    def beliefs(self) -> np.ndarray:
        """Return a copy of the belief map indexed [row, col]."""
        return self._beliefs.copy()

    @property
    def candidates(self) -> list[Coord]:
        return list(self._candidates)

    def belief_at(self, coord: Coord) -> Belief:
        return Belief(int(self._beliefs[coord.row, coord.col]))

    def restore(self, beliefs: np.ndarray, candidates: Iterable[Coord], has_won: bool) -> None:
        """Load previously saved knowledge."""
        if beliefs.shape != (self._size, self._size):
            raise ValueError(f"Belief map must be {self._size}x{self._size}.")
        self._beliefs = beliefs.astype(np.int8, copy=True)
        self._candidates = list(candidates)
        self._has_won = has_won

    def take_turn(self, match: Match) -> list[Shot]:
        """Attack until a miss or a win, then hand the turn back."""
        shots: list[Shot] = []
        while not self._has_won:
            target = self._next_target()
            if target is None:
                break
            hit = match.make_move(self.player, target.col, target.row)
            shots.append(Shot(target, hit))
            if not hit:
                self._resolve(target, Belief.WATER)
                break
            self._resolve(target, Belief.SHIP)
            self._on_hit(target)
            if match.grid_under_attack().ship_set.all_ships_destroyed():
                self._has_won = True

        logger.debug(
            "opponent_turn mode=%s shots=%d hits=%d won=%s",
            self.mode.value,
            len(shots),
            sum(1 for shot in shots if shot.hit),
            self._has_won,
        )
        if not self._has_won:
            match.switch_players()
        return shots

    def unknown_cells(self) -> list[Coord]:
        """Return every cell with no recorded outcome, row-major."""
        rows, cols = np.nonzero(self._beliefs == Belief.UNKNOWN)
        return [Coord(int(col), int(row)) for row, col in zip(rows, cols)]

    def is_unknown(self, coord: Coord) -> bool:
        if not (0 <= coord.col < self._size and 0 <= coord.row < self._size):
            return False
        return bool(self._beliefs[coord.row, coord.col] == Belief.UNKNOWN)

    @abstractmethod
    def _next_target(self) -> Coord | None:
        """Return the next cell to attack, or None when nothing is left."""

    def _on_hit(self, coord: Coord) -> None:
        """Update follow-up state after a hit."""

    def _resolve(self, coord: Coord, belief: Belief) -> None:
        if not self.is_unknown(coord):
            raise RuntimeError(f"Cell ({coord.col}, {coord.row}) was already resolved.")
        self._beliefs[coord.row, coord.col] = belief
