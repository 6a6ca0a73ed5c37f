"""Hard opponent: checkerboard hunting plus neighbour targeting."""

from __future__ import annotations

from seabattle.game.ai.strategy import OpponentStrategy
from seabattle.game.core.models import Coord, GameMode, neighbors8


class HuntTargetOpponent(OpponentStrategy):
    """Hunt/target opponent with parity optimization.

    While no ship fragment is pending it only probes cells with an odd
    ``col + row``; every ship of length two or more covers such a cell. Each
    hit queues its unknown 8-neighbours, and queued cells are drawn at random
    before hunting resumes.
    """

    mode = GameMode.VS_AI_HARD

    def _next_target(self) -> Coord | None:
        while self._candidates:
            index = self._rng.randrange(len(self._candidates))
            coord = self._candidates.pop(index)
            # Stale entries were resolved after being queued.
            if self.is_unknown(coord):
                return coord
        return self._hunt_target()

    def _hunt_target(self) -> Coord | None:
        unknown = self.unknown_cells()
        if not unknown:
            return None
        parity = [coord for coord in unknown if (coord.col + coord.row) % 2 == 1]
        return self._rng.choice(parity or unknown)

    def _on_hit(self, coord: Coord) -> None:
        for neighbor in neighbors8(coord):
            if self.is_unknown(neighbor):
                self._candidates.append(neighbor)
