import json
import random

import pytest

from seabattle.game.core.match import Match
from seabattle.game.core.models import GameMode, Player
from seabattle.game.saves.repository import SaveRepository
from seabattle.game.saves.service import SaveService


@pytest.fixture
def save_service(tmp_path) -> SaveService:
    return SaveService(SaveRepository(tmp_path))


def test_save_and_load_match(save_service: SaveService) -> None:
    match = Match(5, GameMode.VS_AI_EASY, rng=random.Random(4))
    match.place_all_ships()
    match.make_move(Player.ONE, 2, 2)
    match.switch_players()

    save_service.save_match("quick", match)
    loaded = save_service.load_match("quick")

    assert save_service.list_saves() == ["quick"]
    assert loaded.active_player is Player.TWO
    assert loaded.grid_for(Player.TWO).cell(2, 2).is_hit()
    assert loaded.opponent is not None


def test_load_invalid_save_raises_value_error(save_service: SaveService, tmp_path) -> None:
    (tmp_path / "bad.json").write_text(json.dumps({"name": "bad", "version": 9}), encoding="utf-8")
    with pytest.raises(ValueError, match="Save 'bad' is invalid"):
        save_service.load_match("bad")


def test_delete_save(save_service: SaveService) -> None:
    save_service.save_match("gone", Match(5, GameMode.VS_PLAYER))
    save_service.delete_save("gone")
    assert save_service.list_saves() == []
