from __future__ import annotations

import random

import pytest

from seabattle.game.core.match import Match
from seabattle.game.core.models import Coord, Direction, Player
from seabattle.game.core.ships import Ship


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def human_pass(match: Match) -> None:
    """Player one fires at the first untouched enemy cell, then hands over the turn."""
    grid = match.grid_under_attack()
    for row in range(grid.size):
        for col in range(grid.size):
            if not grid.cell(col, row).is_hit():
                match.make_move(Player.ONE, col, row)
                match.switch_players()
                return
    raise AssertionError("no untouched cell left for player one")


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def single_destroyer_match() -> Match:
    """Custom 5x5 match where player two owns one ship at (0,0)-(0,1)."""
    match = Match.custom(5, (1, 0, 0, 0))
    match.grid_for(Player.TWO).ship_set.add_ship(Ship(2, Coord(0, 0), Direction.SOUTH))
    return match
