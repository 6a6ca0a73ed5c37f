"""Easy opponent: uniform random shots."""

from __future__ import annotations

from seabattle.game.ai.strategy import OpponentStrategy
from seabattle.game.core.models import Coord, GameMode


class RandomShotOpponent(OpponentStrategy):
    """Fires at a uniformly random unknown cell and never follows up on hits."""

    mode = GameMode.VS_AI_EASY

    def _next_target(self) -> Coord | None:
        unknown = self.unknown_cells()
        if not unknown:
            return None
        return self._rng.choice(unknown)
