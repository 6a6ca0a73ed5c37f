"""Opponent construction by match mode."""

from __future__ import annotations

import random

from seabattle.game.ai.hunt_target import HuntTargetOpponent
from seabattle.game.ai.random_shot import RandomShotOpponent
from seabattle.game.ai.strategy import OpponentStrategy
from seabattle.game.core.errors import InvalidConfigurationError
from seabattle.game.core.models import GameMode

_OPPONENTS: dict[GameMode, type[OpponentStrategy]] = {
    GameMode.VS_AI_EASY: RandomShotOpponent,
    GameMode.VS_AI_HARD: HuntTargetOpponent,
}


def build_opponent(mode: GameMode, grid_size: int, rng: random.Random) -> OpponentStrategy:
    """Construct the computer opponent for a computer-opponent mode."""
    opponent_type = _OPPONENTS.get(GameMode(mode))
    if opponent_type is None:
        raise InvalidConfigurationError(f"No computer opponent in {GameMode(mode).value} matches.")
    return opponent_type(grid_size, rng)
