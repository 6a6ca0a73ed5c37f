import random

import pytest

from seabattle.game.ai.factory import build_opponent
from seabattle.game.ai.random_shot import RandomShotOpponent
from seabattle.game.core.errors import InvalidConfigurationError
from seabattle.game.core.match import Match
from seabattle.game.core.models import Belief, Coord, Direction, GameMode, Player
from seabattle.game.core.ships import Ship
from tests.seabattle.conftest import human_pass


def test_easy_opponent_covers_empty_grid_without_repeats() -> None:
    match = Match(5, GameMode.VS_AI_EASY, rng=random.Random(5))
    seen: list[Coord] = []
    for _ in range(25):
        human_pass(match)
        shots = match.run_opponent_turn()
        assert len(shots) == 1
        seen.append(shots[0].coord)
    assert len(set(seen)) == 25
    assert match.opponent.unknown_cells() == []

    match.switch_players()
    assert match.run_opponent_turn() == []
    assert match.active_player is Player.ONE


def test_easy_opponent_keeps_firing_after_hits() -> None:
    match = Match(5, GameMode.VS_AI_EASY, rng=random.Random(9))
    match.grid_for(Player.ONE).ship_set.add_ship(Ship(5, Coord(0, 0), Direction.EAST))
    match.grid_for(Player.ONE).ship_set.add_ship(Ship(5, Coord(0, 1), Direction.EAST))
    total_hits = 0
    for _ in range(25):
        human_pass(match)
        shots = match.run_opponent_turn()
        assert all(shot.hit for shot in shots[:-1])
        total_hits += sum(1 for shot in shots if shot.hit)
        if match.winner is not None:
            break
    assert total_hits == 10
    assert match.winner is Player.TWO
    assert match.opponent.candidates == []


def test_easy_opponent_records_water_on_miss() -> None:
    opponent = RandomShotOpponent(5, random.Random(1))
    match = Match(5, GameMode.VS_AI_EASY)
    match.switch_players()
    shots = opponent.take_turn(match)
    assert opponent.belief_at(shots[0].coord) is Belief.WATER


def test_build_opponent_rejects_human_modes() -> None:
    with pytest.raises(InvalidConfigurationError):
        build_opponent(GameMode.VS_PLAYER, 5, random.Random(0))
    with pytest.raises(InvalidConfigurationError):
        build_opponent(GameMode.CUSTOM, 5, random.Random(0))
