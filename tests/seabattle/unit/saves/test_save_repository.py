import pytest

from seabattle.game.core.match import Match
from seabattle.game.core.models import GameMode
from seabattle.game.saves.repository import SaveRepository
from seabattle.game.saves.schema import match_to_payload


def test_repository_save_list_load_delete(tmp_path) -> None:
    repo = SaveRepository(tmp_path)
    repo.save_payload("Sunday Match", match_to_payload("Sunday Match", Match(5, GameMode.VS_PLAYER)))
    assert "Sunday Match" in repo.list_names()
    assert repo.load_payload("Sunday Match")["name"] == "Sunday Match"
    repo.delete("Sunday Match")
    assert "Sunday Match" not in repo.list_names()


def test_repository_overwrites_existing_save(tmp_path) -> None:
    repo = SaveRepository(tmp_path)
    repo.save_payload("slot", {"name": "slot", "version": 1, "grid_size": 5})
    repo.save_payload("slot", {"name": "slot", "version": 1, "grid_size": 10})
    assert repo.list_names() == ["slot"]
    assert repo.load_payload("slot")["grid_size"] == 10


def test_repository_keeps_colliding_file_names_apart(tmp_path) -> None:
    repo = SaveRepository(tmp_path)
    repo.save_payload("a b", {"name": "a b"})
    repo.save_payload("a_b", {"name": "a_b"})
    assert repo.list_names() == ["a b", "a_b"]
    assert repo.load_payload("a_b")["name"] == "a_b"


def test_repository_load_missing_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        SaveRepository(tmp_path).load_payload("missing")


def test_repository_rejects_empty_name(tmp_path) -> None:
    with pytest.raises(ValueError):
        SaveRepository(tmp_path).save_payload("  ", {})


def test_repository_invalid_json_name_fallback(tmp_path) -> None:
    (tmp_path / "broken.json").write_text("{invalid", encoding="utf-8")
    assert "broken" in SaveRepository(tmp_path).list_names()
